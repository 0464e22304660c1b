"""MTL material library parsing."""

import logging
import os

import jax.numpy as jnp

from .errors import (
    MalformedNumericFieldError,
    MaterialFileNotFoundError,
    NoMaterialsParsedError,
    NotAMaterialFileError,
)
from .utils.defaults import Defaults
from .utils.tokens import fields, first_token, tail

logger = logging.getLogger(__name__)

# Directive -> Material attribute.
_COLORS = {"Ka": "ambient", "Kd": "diffuse", "Ks": "specular"}
_SCALARS = {"Ns": "specular_exponent", "Ni": "optical_density", "d": "dissolve"}
_MAPS = {
    "map_Ka": "map_Ka",
    "map_Kd": "map_Kd",
    "map_Ks": "map_Ks",
    "map_Ns": "map_Ns",
    "map_d": "map_d",
    "map_Bump": "map_bump",
    "map_bump": "map_bump",
    "bump": "map_bump",
}


class Material(object):
    r"""A named surface description read from an MTL file.

    Colors are (3,) float32 arrays, scalars default to 0 and texture maps to
    the empty string.
    """

    def __init__(self, name=Defaults.UNNAMED_MATERIAL):
        self.name = name
        self.ambient = jnp.zeros(3, dtype=jnp.float32)
        self.diffuse = jnp.zeros(3, dtype=jnp.float32)
        self.specular = jnp.zeros(3, dtype=jnp.float32)
        self.specular_exponent = 0.0
        self.optical_density = 0.0
        self.dissolve = 0.0
        self.illumination = 0
        self.map_Ka = ""
        self.map_Kd = ""
        self.map_Ks = ""
        self.map_Ns = ""
        self.map_d = ""
        self.map_bump = ""

    def __repr__(self):
        return f"Material(name={self.name!r})"


def _parse_color(text):
    values = fields(text)
    if len(values) != 3:
        return None
    return jnp.array([float(v) for v in values], dtype=jnp.float32)


def _last_field(line):
    # Options such as `d -halo 0.5` precede the value.
    values = fields(tail(line))
    return values[-1] if values else ""


def load_materials(path, diagnostics=None):
    r"""Parse an MTL file into an ordered list of materials.

    Args:
        path (str): Path to the ``.mtl`` file.
        diagnostics (list, optional): If given, recoverable per-line errors
            are appended to it.

    Returns:
        (list): :class:`Material` objects, in file order.

    Raises:
        NotAMaterialFileError: if ``path`` does not end in ``.mtl``.
        MaterialFileNotFoundError: if the file cannot be opened.
        NoMaterialsParsedError: if the file defines no material.
    """
    path = str(path)
    if os.path.splitext(path)[1].lower() != Defaults.MTL_EXTENSION:
        raise NotAMaterialFileError(path)
    try:
        with open(
            path, "r", encoding=Defaults.ENCODING, errors=Defaults.ENCODING_ERRORS
        ) as f:
            lines = f.readlines()
    except OSError as e:
        raise MaterialFileNotFoundError(path) from e

    materials = []
    current = None
    for lineno, line in enumerate(lines, start=1):
        keyword = first_token(line)
        if not keyword or keyword.startswith("#"):
            continue
        if keyword == "newmtl":
            if current is not None:
                materials.append(current)
            current = Material(tail(line) or Defaults.UNNAMED_MATERIAL)
            continue
        if current is None:
            logger.debug(f"{path}:{lineno}: '{keyword}' before any newmtl, ignored.")
            continue
        try:
            if keyword in _COLORS:
                color = _parse_color(tail(line))
                if color is None:
                    logger.debug(f"{path}:{lineno}: '{keyword}' needs 3 values, ignored.")
                    continue
                setattr(current, _COLORS[keyword], color)
            elif keyword in _SCALARS:
                setattr(current, _SCALARS[keyword], float(_last_field(line)))
            elif keyword == "illum":
                current.illumination = int(_last_field(line))
            elif keyword in _MAPS:
                setattr(current, _MAPS[keyword], tail(line))
        except ValueError:
            error = MalformedNumericFieldError(
                f"could not parse '{keyword}' value {tail(line)!r}",
                path=path, lineno=lineno, line=line,
            )
            logger.warning(str(error))
            if diagnostics is not None:
                diagnostics.append(error)

    if current is not None:
        materials.append(current)
    if not materials:
        raise NoMaterialsParsedError(path)
    logger.debug(f"Loaded {len(materials)} material(s) from {path}")
    return materials
