import numpy as np
import jax.numpy as jnp


def assert_array(var, varname):
    r"""Assert that the variable is a numpy or JAX array."""
    if not isinstance(var, (np.ndarray, jnp.ndarray)):
        raise TypeError(
            f"Expected {varname} of type np.ndarray or jnp.ndarray. Got {type(var)} instead."
        )


def assert_shape(var, varname, ncols):
    r"""Assert that the variable is a 2D array with ``ncols`` columns."""
    assert_array(var, varname)
    if var.ndim != 2 or var.shape[-1] != ncols:
        raise ValueError(
            f"{varname} must have two dimensions, and the last dimension must"
            f" be of shape {ncols}. Got shape {var.shape} instead."
        )
