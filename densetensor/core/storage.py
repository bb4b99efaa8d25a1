"""
DenseTensor Core: Storage and Shape Arithmetic
===============================================

The foundation layer - owned contiguous buffers, component types, and the
row-major addressing helpers every tensor is built on.
"""

from __future__ import annotations
import operator
import numpy as np
from typing import Any, Iterable, Optional, Tuple, Union
from enum import Enum

from ..errors import DTypeError, InvalidShapeError


class DType(Enum):
    """Machine arithmetic scalar types a tensor may hold."""

    BOOL = ("bool", np.bool_)
    INT8 = ("int8", np.int8)
    INT16 = ("int16", np.int16)
    INT32 = ("int32", np.int32)
    INT64 = ("int64", np.int64)
    UINT8 = ("uint8", np.uint8)
    UINT16 = ("uint16", np.uint16)
    UINT32 = ("uint32", np.uint32)
    UINT64 = ("uint64", np.uint64)
    FLOAT32 = ("float32", np.float32)
    FLOAT64 = ("float64", np.float64)

    def __init__(self, name: str, numpy_dtype):
        self._name = name
        self.numpy_dtype = numpy_dtype

    def __repr__(self) -> str:
        return f"densetensor.{self._name}"

    def __str__(self) -> str:
        return self._name

    @property
    def is_floating(self) -> bool:
        return np.dtype(self.numpy_dtype).kind == "f"

    @property
    def is_bool(self) -> bool:
        return self is DType.BOOL

    def zero(self) -> Any:
        """Zero of this type as a numpy scalar."""
        return self.numpy_dtype(0)

    @classmethod
    def coerce(cls, dtype: Union["DType", str, Any]) -> "DType":
        """
        Resolve a dtype description to a DType member.

        Accepts a DType, a member name such as ``"int32"``, or anything
        ``np.dtype`` understands. Complex, object, string and other
        non-arithmetic types raise DTypeError.
        """
        if isinstance(dtype, cls):
            return dtype
        if isinstance(dtype, str):
            for member in cls:
                if member._name == dtype:
                    return member
        try:
            np_dtype = np.dtype(dtype)
        except TypeError as exc:
            raise DTypeError(f"Unsupported component type {dtype!r}") from exc
        for member in cls:
            if np.dtype(member.numpy_dtype) == np_dtype:
                return member
        raise DTypeError(
            f"Unsupported component type {dtype!r}: only bool, integer and "
            f"floating point types are allowed"
        )


bool_ = DType.BOOL
int8 = DType.INT8
int16 = DType.INT16
int32 = DType.INT32
int64 = DType.INT64
uint8 = DType.UINT8
uint16 = DType.UINT16
uint32 = DType.UINT32
uint64 = DType.UINT64
float32 = DType.FLOAT32
float64 = DType.FLOAT64


def normalize_shape(shape: Iterable[Any]) -> Tuple[int, ...]:
    """Validate a shape and return it as a tuple of Python ints."""
    try:
        entries = list(shape)
    except TypeError as exc:
        raise InvalidShapeError(f"Shape must be a sequence of ints, got {shape!r}") from exc
    result = []
    for axis, extent in enumerate(entries):
        try:
            extent = operator.index(extent)
        except TypeError as exc:
            raise InvalidShapeError(
                f"Extent {extent!r} for dimension {axis} is not an integer"
            ) from exc
        if extent < 0:
            raise InvalidShapeError(f"Extent {extent} for dimension {axis} is negative")
        result.append(extent)
    return tuple(result)


def num_elements(shape: Tuple[int, ...]) -> int:
    # Empty product: a rank-0 tensor holds exactly one element.
    if len(shape) == 0:
        return 1
    result = 1
    for s in shape:
        result *= s
    return result


def row_major_strides(shape: Tuple[int, ...]) -> Tuple[int, ...]:
    if len(shape) == 0:
        return ()
    strides = [1]
    for dim in reversed(shape[1:]):
        strides.append(strides[-1] * dim)
    return tuple(reversed(strides))


class Storage:
    """Exclusively owned, contiguous 1-D buffer backing tensor data."""

    def __init__(
        self,
        size: int,
        dtype: DType = float64,
        fill_value: Optional[Any] = None,
        data: Optional[np.ndarray] = None,
    ):
        self.size = size
        self.dtype = dtype

        if data is not None:
            data = np.asarray(data)
            if data.size != size:
                raise ValueError(f"Storage of size {size} cannot hold {data.size} values")
            self._data = np.array(data, dtype=dtype.numpy_dtype).reshape(size)
        else:
            try:
                self._data = np.zeros(size, dtype=dtype.numpy_dtype)
            except (ValueError, OverflowError, MemoryError) as exc:
                raise InvalidShapeError(
                    f"Cannot allocate {size} elements of {dtype}"
                ) from exc
            if fill_value is not None:
                self._data[...] = fill_value

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, idx: int) -> Any:
        return self._data[idx]

    def __setitem__(self, idx: int, value: Any):
        self._data[idx] = value

    def clone(self) -> 'Storage':
        return Storage(self.size, self.dtype, data=self._data.copy())

    def numpy(self) -> np.ndarray:
        return self._data
