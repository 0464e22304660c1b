import os

import jax.numpy as jnp

from .defaults import Defaults


def face_normals(vertices, faces):
    r"""Unnormalized face normals (their length is twice the face area).

    Args:
        vertices (jnp.ndarray): (V, 3) vertex positions.
        faces (jnp.ndarray): (F, 3) vertex indices.

    Returns:
        (jnp.ndarray): (F, 3) face normals.
    """
    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    return jnp.cross(v1 - v0, v2 - v0)


def per_vertex_normals(vertices, faces, eps=Defaults.EPSILON):
    r"""Area-weighted per-vertex normals of a triangle mesh.

    Each face contributes its unnormalized normal to its three corners, the
    sums are then normalized. Vertices that no face references get a zero
    normal.

    Args:
        vertices (jnp.ndarray): (V, 3) vertex positions.
        faces (jnp.ndarray): (F, 3) vertex indices.

    Returns:
        (jnp.ndarray): (V, 3) unit normals, aligned 1:1 with ``vertices``.
    """
    vertices = jnp.asarray(vertices)
    faces = jnp.asarray(faces)
    normals = jnp.zeros_like(vertices)
    if faces.shape[0] == 0:
        return normals
    fn = face_normals(vertices, faces)
    for corner in range(3):
        normals = normals.at[faces[:, corner]].add(fn)
    n_len = jnp.linalg.norm(normals, axis=-1, keepdims=True)
    return normals / jnp.maximum(n_len, eps)


def resolve_sibling_path(mesh_path, name):
    r"""Path of ``name`` relative to the directory holding ``mesh_path``."""
    return os.path.join(os.path.dirname(str(mesh_path)), name)
