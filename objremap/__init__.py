from .errors import *  # noqa: F401,F403
from .materials import Material, load_materials
from .obj import IndexTriple, ObjModel, ObjParser, SubMesh, TriangleIndices
from .remap import RemapIssue, remap_indices, remap_mesh, remap_model, remap_submesh
from .trianglemesh import TriangleMesh
from .utils.meshutils import per_vertex_normals, resolve_sibling_path

__version__ = "0.1.0"
