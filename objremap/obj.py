"""Wavefront OBJ parsing into positions, texcoords, normals and sub-meshes.

The file is read once, line by line. Global attribute buffers grow
monotonically; faces are accumulated for the current sub-mesh and snapshotted
into a :class:`SubMesh` whenever an ``o``/``g`` directive or a material switch
closes it.
"""

import logging
import os
from collections import namedtuple

import numpy as np
import jax.numpy as jnp

from .errors import (
    EmptyModelError,
    FaceIndexError,
    LineError,
    MalformedFaceError,
    MalformedNumericFieldError,
    MaterialLibraryError,
    MeshFileNotFoundError,
    NotAnObjFileError,
)
from .materials import load_materials
from .utils.defaults import Defaults
from .utils.meshutils import resolve_sibling_path
from .utils.tokens import fields, first_token, resolve_index, split, tail

logger = logging.getLogger(__name__)


# One triangle corner. ``texcoord`` and ``normal`` are None when absent.
IndexTriple = namedtuple("IndexTriple", ["position", "texcoord", "normal"])


class TriangleIndices(object):
    r"""Per-face index view of a sub-mesh, one row per triangle.

    ``texcoords`` (resp. ``normals``) is None unless every corner of every
    face carries a texcoord (resp. normal) index.
    """

    def __init__(self, positions, texcoords=None, normals=None):
        # positions: np (F, 3) int32
        self.positions = positions
        self.texcoords = texcoords
        self.normals = normals

    def __len__(self):
        return self.positions.shape[0]


class SubMesh(object):
    r"""A named group of triangles sharing one material."""

    def __init__(self, name, faces, material_name=None):
        self.name = name
        self.faces = faces
        self.material_name = material_name
        self.material = None

    def __len__(self):
        return len(self.faces)

    def __repr__(self):
        return (
            f"SubMesh(name={self.name!r}, faces={len(self.faces)},"
            f" material={self.material_name!r})"
        )

    def triangle_indices(self):
        positions = np.array(
            [[corner.position for corner in face] for face in self.faces],
            dtype=np.int32,
        ).reshape(-1, 3)
        return TriangleIndices(
            positions,
            texcoords=self._attribute_indices("texcoord"),
            normals=self._attribute_indices("normal"),
        )

    def _attribute_indices(self, attr):
        rows = [[getattr(corner, attr) for corner in face] for face in self.faces]
        if not rows or any(idx is None for row in rows for idx in row):
            return None
        return np.array(rows, dtype=np.int32)


class ObjModel(object):
    r"""Everything loaded from one OBJ file and its material libraries.

    Attributes:
        path (str): Path of the OBJ file.
        positions (jnp.ndarray): (V, 3) float32 positions.
        texcoords (jnp.ndarray): (T, 2) float32 texture coordinates.
        normals (jnp.ndarray): (N, 3) float32 normals, as given in the file.
        meshes (list): :class:`SubMesh` objects, in file order.
        materials (list): :class:`objremap.materials.Material` objects from
            every ``mtllib``, in load order.
        diagnostics (list): Recoverable errors met while parsing.
    """

    def __init__(self, path, positions, texcoords, normals, meshes, materials, diagnostics):
        self.path = path
        self.positions = positions
        self.texcoords = texcoords
        self.normals = normals
        self.meshes = meshes
        self.materials = materials
        self.diagnostics = diagnostics

    @classmethod
    def from_file(cls, path):
        """Load a Wavefront OBJ file and return an ObjModel."""
        return ObjParser().parse(path)

    def find_mesh(self, name):
        for mesh in self.meshes:
            if mesh.name == name:
                return mesh
        raise KeyError(f"No sub-mesh named {name!r} in {self.path}")


def _to_array(rows, ncols):
    return jnp.array(np.array(rows, dtype=np.float32).reshape(-1, ncols))


class ObjParser(object):
    r"""Single-pass OBJ reader.

    A parser instance holds the accumulation state of one file; ``parse``
    resets it, so an instance can be reused sequentially.
    """

    def __init__(self, progress_every=Defaults.PROGRESS_EVERY_N_LINES):
        self.progress_every = progress_every
        self._reset(None)

    def _reset(self, path):
        self.path = path
        self.positions = []
        self.texcoords = []
        self.normals = []
        self.meshes = []
        self.materials = []
        self.diagnostics = []
        # Current sub-mesh.
        self.listening = False
        self.base_name = Defaults.UNNAMED_MESH
        self.mesh_name = Defaults.UNNAMED_MESH
        self.material_name = None
        self.faces = []

    def parse(self, path):
        r"""Parse ``path`` and return an :class:`ObjModel`.

        Raises:
            NotAnObjFileError: if ``path`` does not end in ``.obj``.
            MeshFileNotFoundError: if the file cannot be opened.
            FaceIndexError: if a face references a missing position.
            EmptyModelError: if neither positions nor sub-meshes were read.
        """
        path = str(path)
        if os.path.splitext(path)[1].lower() != Defaults.OBJ_EXTENSION:
            raise NotAnObjFileError(path)
        self._reset(path)
        try:
            with open(
                path, "r", encoding=Defaults.ENCODING, errors=Defaults.ENCODING_ERRORS
            ) as f:
                for lineno, line in enumerate(f, start=1):
                    self._parse_line(line, lineno)
                    if self.progress_every and lineno % self.progress_every == 0:
                        self._log_progress()
        except OSError as e:
            raise MeshFileNotFoundError(path) from e

        self._close_mesh()
        self._resolve_materials()
        self._check_position_indices()

        if not self.positions and not self.meshes:
            raise EmptyModelError(path)

        logger.info(
            f"Loaded {path}: {len(self.positions)} positions, {len(self.texcoords)}"
            f" texcoords, {len(self.normals)} normals, {len(self.meshes)} sub-mesh(es),"
            f" {len(self.materials)} material(s), {len(self.diagnostics)} diagnostic(s)"
        )
        return ObjModel(
            path,
            positions=_to_array(self.positions, 3),
            texcoords=_to_array(self.texcoords, 2),
            normals=_to_array(self.normals, 3),
            meshes=self.meshes,
            materials=self.materials,
            diagnostics=self.diagnostics,
        )

    def _log_progress(self):
        logger.debug(
            f"- {self.mesh_name} | vertices > {len(self.positions)}"
            f" | texcoords > {len(self.texcoords)} | normals > {len(self.normals)}"
            f" | triangles > {len(self.faces)}"
            + (f" | material: {self.material_name}" if self.material_name else "")
        )

    def _parse_line(self, line, lineno):
        keyword = first_token(line)
        if not keyword or keyword.startswith("#"):
            return
        handler = self._handlers.get(keyword)
        if handler is None:
            return
        try:
            handler(self, line)
        except LineError as error:
            error.path, error.lineno, error.line = self.path, lineno, line
            error.args = (f"{self.path}:{lineno}: {error.args[0]}",)
            logger.warning(str(error))
            self.diagnostics.append(error)

    # Directive handlers.

    def _read_floats(self, line, count):
        values = fields(tail(line))
        if len(values) < count:
            raise MalformedNumericFieldError(
                f"'{first_token(line)}' needs {count} values, got {len(values)}"
            )
        try:
            return [float(v) for v in values[:count]]
        except ValueError:
            raise MalformedNumericFieldError(
                f"could not parse '{first_token(line)}' values {tail(line)!r}"
            ) from None

    def _on_position(self, line):
        self.positions.append(self._read_floats(line, 3))

    def _on_texcoord(self, line):
        self.texcoords.append(self._read_floats(line, 2))

    def _on_normal(self, line):
        self.normals.append(self._read_floats(line, 3))

    def _on_face(self, line):
        records = fields(tail(line))
        if len(records) != 3:
            raise MalformedFaceError(
                f"only triangles are supported, got a face with {len(records)} vertices"
            )
        self.faces.append(tuple(self._parse_record(record) for record in records))

    def _parse_record(self, record):
        parts = split(record, "/")
        if len(parts) not in (1, 2, 3):
            raise MalformedFaceError(f"invalid face vertex {record!r}")
        try:
            position = resolve_index(parts[0], len(self.positions))
            texcoord = normal = None
            if len(parts) >= 2 and (len(parts) == 2 or parts[1] != ""):
                # p/t or p/t/n
                texcoord = resolve_index(parts[1], len(self.texcoords))
            if len(parts) == 3:
                # p//n or p/t/n
                normal = resolve_index(parts[2], len(self.normals))
        except ValueError:
            raise MalformedFaceError(f"invalid face vertex {record!r}") from None
        return IndexTriple(position, texcoord, normal)

    def _on_group(self, line):
        name = tail(line) or Defaults.UNNAMED_MESH
        if self.listening:
            self._close_mesh()
        self.listening = True
        self.base_name = self.mesh_name = name

    def _on_usemtl(self, line):
        material_name = tail(line)
        if self._close_mesh():
            self.mesh_name = self._split_name(self.base_name)
        self.material_name = material_name

    def _on_mtllib(self, line):
        mtl_path = resolve_sibling_path(self.path, tail(line))
        logger.debug(f"- find materials in: {mtl_path}")
        try:
            self.materials.extend(load_materials(mtl_path, self.diagnostics))
        except MaterialLibraryError as error:
            logger.warning(str(error))
            self.diagnostics.append(error)

    _handlers = {
        "v": _on_position,
        "vt": _on_texcoord,
        "vn": _on_normal,
        "f": _on_face,
        "o": _on_group,
        "g": _on_group,
        "usemtl": _on_usemtl,
        "mtllib": _on_mtllib,
    }

    # Sub-mesh bookkeeping.

    def _close_mesh(self):
        r"""Snapshot pending faces into a SubMesh. Returns True if one was made."""
        if not self.faces or not self.positions:
            return False
        self.meshes.append(SubMesh(self.mesh_name, self.faces, self.material_name))
        self.faces = []
        return True

    def _split_name(self, base):
        used = {mesh.name for mesh in self.meshes}
        suffix = Defaults.SPLIT_SUFFIX_START
        while f"{base}_{suffix}" in used:
            suffix += 1
        return f"{base}_{suffix}"

    def _resolve_materials(self):
        for mesh in self.meshes:
            if mesh.material_name is None:
                continue
            mesh.material = next(
                (m for m in self.materials if m.name == mesh.material_name), None
            )
            if mesh.material is None:
                logger.warning(
                    f"Sub-mesh '{mesh.name}' uses unknown material '{mesh.material_name}'"
                )

    def _check_position_indices(self):
        size = len(self.positions)
        for mesh in self.meshes:
            for i, face in enumerate(mesh.faces):
                for j, corner in enumerate(face):
                    if not 0 <= corner.position < size:
                        raise FaceIndexError(mesh.name, i, j, corner.position, size)
