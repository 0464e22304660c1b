"""Exceptions raised while loading and remapping OBJ meshes.

Structural errors (wrong extension, missing file, empty model) abort a load.
Per-line errors (malformed faces and numeric fields, material library
problems) are caught by the parser, logged, and collected in
``ObjModel.diagnostics``.
"""


class ObjRemapError(Exception):
    r"""Base class for every error raised by this package."""


class NotAnObjFileError(ObjRemapError, ValueError):
    def __init__(self, path):
        super().__init__(f"Not an OBJ file (expected a .obj extension): {path}")
        self.path = path


class MeshFileNotFoundError(ObjRemapError, FileNotFoundError):
    def __init__(self, path):
        super().__init__(f"Could not open mesh file: {path}")
        self.path = path


class EmptyModelError(ObjRemapError, ValueError):
    def __init__(self, path):
        super().__init__(f"No positions and no sub-meshes were loaded from {path}")
        self.path = path


class FaceIndexError(ObjRemapError, IndexError):
    r"""A face references a position that does not exist."""

    def __init__(self, mesh_name, face, corner, index, size):
        super().__init__(
            f"Position index {index} out of range [0, {size}) in sub-mesh"
            f" '{mesh_name}', face {face}, corner {corner}."
        )
        self.mesh_name = mesh_name
        self.face = face
        self.corner = corner
        self.index = index


class LineError(ObjRemapError, ValueError):
    r"""Recoverable error tied to a single input line."""

    def __init__(self, message, path=None, lineno=None, line=None):
        location = ""
        if path is not None and lineno is not None:
            location = f"{path}:{lineno}: "
        super().__init__(f"{location}{message}")
        self.path = path
        self.lineno = lineno
        self.line = line


class MalformedFaceError(LineError):
    pass


class MalformedNumericFieldError(LineError):
    pass


class MaterialLibraryError(ObjRemapError):
    r"""Base class for material library failures."""


class NotAMaterialFileError(MaterialLibraryError, ValueError):
    def __init__(self, path):
        super().__init__(f"Not a material library (expected a .mtl extension): {path}")
        self.path = path


class MaterialFileNotFoundError(MaterialLibraryError, FileNotFoundError):
    def __init__(self, path):
        super().__init__(f"Could not open material library: {path}")
        self.path = path


class NoMaterialsParsedError(MaterialLibraryError, ValueError):
    def __init__(self, path):
        super().__init__(f"No materials were parsed from {path}")
        self.path = path


class RemapInconsistencyError(ObjRemapError, ValueError):
    r"""One or more face corners could not be mapped to a remapped vertex.

    Attributes:
        mesh_name (str): Name of the sub-mesh being remapped.
        issues (list): :class:`objremap.remap.RemapIssue` records, one per
            failing corner, in face order.
    """

    def __init__(self, mesh_name, issues):
        super().__init__(
            f"{len(issues)} face corner(s) of sub-mesh '{mesh_name}' could not be"
            " remapped."
        )
        self.mesh_name = mesh_name
        self.issues = list(issues)
