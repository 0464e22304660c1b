"""Vertex remapping ("exploding") of multi-index OBJ faces.

OBJ faces index positions and texture coordinates independently, while most
renderers need one index per vertex. Every distinct (position, texcoord)
pair used by a sub-mesh becomes one output vertex, so a position used with
``k`` texcoords is emitted ``k`` times. Face indices are rewritten to the new
numbering and per-vertex normals are recomputed on the result.
"""

import logging
from collections import namedtuple

import numpy as np
import jax.numpy as jnp

from .errors import RemapInconsistencyError
from .trianglemesh import TriangleMesh
from .utils.asserts import assert_array, assert_shape
from .utils.meshutils import per_vertex_normals

logger = logging.getLogger(__name__)


# A face corner whose (position, texcoord) pair has no remapped vertex.
RemapIssue = namedtuple("RemapIssue", ["face", "corner", "position", "texcoord"])


def remap_indices(position_indices, texcoord_indices, num_positions, num_texcoords=0, name=""):
    r"""Assign one new vertex index per distinct (position, texcoord) pair.

    New vertices are grouped by ascending position index; within a group,
    texcoords keep the order in which faces first use them.

    Args:
        position_indices (np.ndarray): (F, 3) position index per corner.
        texcoord_indices (np.ndarray): (F, 3) texcoord index per corner, or
            None to remap on positions alone.
        num_positions (int): Size of the position buffer.
        num_texcoords (int): Size of the texcoord buffer.
        name (str): Sub-mesh name, used in error reports.

    Returns:
        vertex_to_position (np.ndarray): (V,) original position per new vertex.
        vertex_to_texcoord (np.ndarray): (V,) original texcoord per new
            vertex, or None when ``texcoord_indices`` is None.
        faces (np.ndarray): (F, 3) rewritten face indices.

    Raises:
        RemapInconsistencyError: if any corner references a position or
            texcoord outside its buffer. All failing corners are reported.
    """
    assert_shape(position_indices, "position_indices", 3)
    if texcoord_indices is not None:
        assert_shape(texcoord_indices, "texcoord_indices", 3)
        if texcoord_indices.shape != position_indices.shape:
            raise ValueError(
                "position_indices and texcoord_indices must have the same shape."
                f" Got {position_indices.shape} and {texcoord_indices.shape}."
            )
    position_indices = np.asarray(position_indices)
    if texcoord_indices is not None:
        texcoord_indices = np.asarray(texcoord_indices)

    def corner_pair(i, j):
        p = int(position_indices[i, j])
        t = None if texcoord_indices is None else int(texcoord_indices[i, j])
        return p, t

    def valid(p, t):
        if not 0 <= p < num_positions:
            return False
        return t is None or 0 <= t < num_texcoords

    num_faces = position_indices.shape[0]

    # Distinct texcoords per used position, in first-seen order.
    texcoords_of = {}
    for i in range(num_faces):
        for j in range(3):
            p, t = corner_pair(i, j)
            if valid(p, t):
                texcoords_of.setdefault(p, {}).setdefault(t, None)

    new_index = {}
    vertex_to_position = []
    vertex_to_texcoord = []
    for p in sorted(texcoords_of):
        for t in texcoords_of[p]:
            new_index[(p, t)] = len(vertex_to_position)
            vertex_to_position.append(p)
            vertex_to_texcoord.append(t)

    faces = np.zeros((num_faces, 3), dtype=np.int32)
    issues = []
    for i in range(num_faces):
        for j in range(3):
            p, t = corner_pair(i, j)
            idx = new_index.get((p, t))
            if idx is None:
                logger.error(f"F({i},{j}) of sub-mesh '{name}': no vertex for position {p}, texcoord {t}")
                issues.append(RemapIssue(i, j, p, t))
            else:
                faces[i, j] = idx
    if issues:
        raise RemapInconsistencyError(name, issues)

    vertex_to_position = np.array(vertex_to_position, dtype=np.int32)
    if texcoord_indices is None:
        return vertex_to_position, None, faces
    return vertex_to_position, np.array(vertex_to_texcoord, dtype=np.int32), faces


def remap_mesh(
    positions,
    texcoords,
    indices,
    name="",
    material=None,
    normals_fn=per_vertex_normals,
):
    r"""Remap one sub-mesh into a single-index :class:`TriangleMesh`.

    Args:
        positions (jnp.ndarray): (P, 3) global position buffer.
        texcoords (jnp.ndarray): (T, 2) global texcoord buffer.
        indices (objremap.obj.TriangleIndices): Index view of the sub-mesh.
        name (str): Sub-mesh name.
        material (objremap.materials.Material): Carried over to the output.
        normals_fn (callable): Maps (vertices (V, 3), faces (F, 3)) to (V, 3)
            per-vertex normals. Any normals from the source file are discarded.

    Returns:
        (TriangleMesh): Fresh buffers; the inputs are not modified.
    """
    assert_shape(positions, "positions", 3)
    assert_shape(texcoords, "texcoords", 2)
    vertex_to_position, vertex_to_texcoord, faces = remap_indices(
        indices.positions,
        indices.texcoords,
        num_positions=positions.shape[0],
        num_texcoords=texcoords.shape[0],
        name=name,
    )
    vertices = jnp.asarray(positions)[jnp.asarray(vertex_to_position)].reshape(-1, 3)
    new_texcoords = None
    if vertex_to_texcoord is not None:
        new_texcoords = jnp.asarray(texcoords)[jnp.asarray(vertex_to_texcoord)].reshape(-1, 2)
    faces = jnp.asarray(faces)

    normals = normals_fn(vertices, faces)
    assert_array(normals, "normals")
    if normals.shape != vertices.shape:
        raise ValueError(
            f"normals_fn must return one normal per vertex ({vertices.shape}). Got"
            f" shape {normals.shape} instead."
        )
    logger.debug(
        f"Remapped '{name}': {len(indices)} faces, {vertices.shape[0]} vertices"
        f" from {len(np.unique(indices.positions))} positions"
    )
    return TriangleMesh(
        vertices,
        faces,
        texcoords=new_texcoords,
        normals=normals,
        name=name,
        material=material,
    )


def remap_submesh(model, mesh, normals_fn=per_vertex_normals):
    r"""Remap ``mesh`` (a SubMesh, its name, or its index) of ``model``."""
    if isinstance(mesh, int):
        mesh = model.meshes[mesh]
    elif isinstance(mesh, str):
        mesh = model.find_mesh(mesh)
    return remap_mesh(
        model.positions,
        model.texcoords,
        mesh.triangle_indices(),
        name=mesh.name,
        material=mesh.material,
        normals_fn=normals_fn,
    )


def remap_model(model, normals_fn=per_vertex_normals):
    r"""Remap every sub-mesh of ``model``, in order."""
    return [remap_submesh(model, mesh, normals_fn=normals_fn) for mesh in model.meshes]
