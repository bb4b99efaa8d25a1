"""Exceptions raised by densetensor.

Every error derives from :class:`TensorError` and from the closest built-in
exception, so ``except IndexError`` keeps working for callers that do not
know about this package.
"""


class TensorError(Exception):
    """Base class for all densetensor errors."""


class IndexDimensionError(TensorError, IndexError):
    """Coordinate arity does not match the tensor rank."""


class IndexOutOfRangeError(TensorError, IndexError):
    """A coordinate lies outside the extent of its axis."""


class LinearIndexOutOfRangeError(TensorError, IndexError):
    """A linear index lies outside ``[0, num_elements)``."""


class RankMismatchError(TensorError, ValueError):
    """A tensor has the wrong rank for the wrapper built around it."""


class DimensionMismatchError(TensorError, ValueError):
    """Operand extents are incompatible for an operation."""


class FileOpenError(TensorError, OSError):
    """A tensor file could not be opened for reading or writing."""


class ParseError(TensorError, ValueError):
    """Tensor text is malformed, truncated or has trailing tokens."""


class InvalidShapeError(TensorError, ValueError):
    """A shape contains a negative or non-integer extent."""


class DTypeError(TensorError, TypeError):
    """Component type is not a machine arithmetic scalar type."""
