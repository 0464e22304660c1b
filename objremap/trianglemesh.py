# Single-index triangle mesh produced by the vertex remapper.

import numpy as np


class TriangleMesh:
    """Triangle mesh with one index per vertex, backed by JAX arrays."""

    def __init__(self, vertices, faces, texcoords=None, normals=None, name="", material=None):
        # vertices:  jnp (V, 3) float32
        # faces:     jnp (F, 3) int32
        # texcoords: jnp (V, 2) float32, or None
        # normals:   jnp (V, 3) float32, or None
        self.vertices = vertices
        self.faces = faces
        self.texcoords = texcoords
        self.normals = normals
        self.name = name
        self.material = material

    @property
    def num_vertices(self):
        return self.vertices.shape[0]

    @property
    def num_faces(self):
        return self.faces.shape[0]

    def __repr__(self):
        return (
            f"TriangleMesh(name={self.name!r}, vertices={self.num_vertices},"
            f" faces={self.num_faces})"
        )

    @classmethod
    def from_obj(cls, path, mesh_index=0):
        """Load a Wavefront OBJ file and remap one of its sub-meshes."""
        from .obj import ObjModel
        from .remap import remap_submesh

        model = ObjModel.from_file(path)
        if not model.meshes:
            raise ValueError(f"{path} contains no faces.")
        return remap_submesh(model, mesh_index)

    def to_numpy(self):
        """Return the buffers as a dict of numpy arrays (absent ones omitted)."""
        arrays = {"vertices": self.vertices, "faces": self.faces}
        if self.texcoords is not None:
            arrays["texcoords"] = self.texcoords
        if self.normals is not None:
            arrays["normals"] = self.normals
        return {key: np.asarray(value) for key, value in arrays.items()}
