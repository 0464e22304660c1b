class Defaults:
    r"""Default values shared by the parsers, the remapper and the CLI."""

    # File extensions (compared case-insensitively).
    OBJ_EXTENSION = ".obj"
    MTL_EXTENSION = ".mtl"

    # Text decoding of OBJ and MTL files. A leading BOM is dropped and
    # undecodable bytes are replaced.
    ENCODING = "utf-8-sig"
    ENCODING_ERRORS = "replace"

    # Name given to a sub-mesh whose `o`/`g` directive carries no name.
    UNNAMED_MESH = "unnamed"
    # Name given to a material whose `newmtl` directive carries no name.
    UNNAMED_MATERIAL = "none"
    # First numeric suffix used when a `usemtl` splits a sub-mesh.
    SPLIT_SUFFIX_START = 2

    # Emit a debug progress line every N input lines.
    PROGRESS_EVERY_N_LINES = 1000

    # Guard against division by zero when normalizing vectors.
    EPSILON = 1e-12
