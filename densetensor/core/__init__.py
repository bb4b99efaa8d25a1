"""Core storage and shape infrastructure for DenseTensor."""

from .storage import (
    DType,
    Storage,
    normalize_shape,
    num_elements,
    row_major_strides,
)

__all__ = [
    'DType',
    'Storage',
    'normalize_shape',
    'num_elements',
    'row_major_strides',
]
