class Mesh2SchematicError(Exception):
    """Base class for every error raised by mesh2schematic."""


class ConfigError(Mesh2SchematicError, ValueError):
    """Invalid resolution, worker count, grid dimension or output format."""


class MeshError(Mesh2SchematicError):
    """A mesh file could not be read or violates the index invariant."""


class ContactTestError(Mesh2SchematicError, ArithmeticError):
    """Numerical failure inside the cube/triangle contact test."""


class EncodeError(Mesh2SchematicError):
    """A tag tree could not be built or written."""
