"""
DenseTensor: Dense Row-Major Tensors
====================================

Owned, contiguous multi-dimensional arrays of machine arithmetic types, a
plain-text file format, and rank-1/rank-2 facades with a matrix-vector product.

Example:
    >>> import densetensor as dt
    >>> m = dt.Matrix(2, 2, dtype="int64")
    >>> m[0, 0], m[0, 1], m[1, 0], m[1, 1] = 1, 2, 3, 4
    >>> v = dt.Vector(2, dtype="int64")
    >>> v[0], v[1] = 5, 6
    >>> list(dt.matvec(m, v))
    [17, 39]
"""

__version__ = "0.1.0"

# Core types
from .tensor import Tensor
from .linalg import Vector, Matrix, matvec

# Serialization
from .io import read_tensor, write_tensor, parse_tensor, format_tensor

# Configuration
from .config import TensorConfig, get_config, set_config

# Low-level core (for advanced users)
from .core import DType, Storage
from .core.storage import (
    bool_,
    int8,
    int16,
    int32,
    int64,
    uint8,
    uint16,
    uint32,
    uint64,
    float32,
    float64,
)

from .errors import (
    TensorError,
    IndexDimensionError,
    IndexOutOfRangeError,
    LinearIndexOutOfRangeError,
    RankMismatchError,
    DimensionMismatchError,
    FileOpenError,
    ParseError,
    InvalidShapeError,
    DTypeError,
)


__all__ = [
    # Version
    "__version__",

    # Main classes
    "Tensor",
    "Vector",
    "Matrix",
    "matvec",

    # Serialization
    "read_tensor",
    "write_tensor",
    "parse_tensor",
    "format_tensor",

    # Configuration
    "TensorConfig",
    "get_config",
    "set_config",

    # Core types (advanced)
    "DType",
    "Storage",
    "bool_",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",

    # Errors
    "TensorError",
    "IndexDimensionError",
    "IndexOutOfRangeError",
    "LinearIndexOutOfRangeError",
    "RankMismatchError",
    "DimensionMismatchError",
    "FileOpenError",
    "ParseError",
    "InvalidShapeError",
    "DTypeError",
]
