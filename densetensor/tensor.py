"""Dense row-major tensor with an exclusively owned buffer."""

from __future__ import annotations
import operator
from typing import Any, Iterable, Optional, Sequence, Tuple, Union
import numpy as np

from .config import get_config
from .core.storage import DType, Storage, normalize_shape, num_elements, row_major_strides
from .errors import IndexDimensionError, IndexOutOfRangeError, LinearIndexOutOfRangeError

_MISSING = object()


class Tensor:
    """
    Dense multi-dimensional array of a single arithmetic component type.

    Elements live in one contiguous buffer in row-major order (the last axis
    varies fastest). The shape is fixed at construction. A rank-0 tensor has
    an empty shape and holds exactly one element.

    Example:
        >>> t = Tensor((2, 3), fill_value=1.5)
        >>> t.at((1, 2))
        1.5
        >>> t.at((1, 2), 4.0)
        >>> t.value_at(5)
        4.0
    """

    def __init__(
        self,
        shape: Iterable[int] = (),
        fill_value: Optional[Any] = None,
        dtype: Optional[Union[DType, str, Any]] = None,
    ):
        """
        Create a tensor.

        Args:
            shape: Per-axis extents, all >= 0 (default: rank 0)
            fill_value: Initial value of every element (default: zero)
            dtype: Component type (default: configured default_dtype)
        """
        if dtype is None:
            dtype = get_config().default_dtype
        self._dtype = DType.coerce(dtype)
        self._shape = normalize_shape(shape)
        self._storage = Storage(num_elements(self._shape), self._dtype, fill_value)

    @classmethod
    def _wrap(cls, shape: Tuple[int, ...], storage: Storage) -> 'Tensor':
        tensor = cls.__new__(cls)
        tensor._dtype = storage.dtype
        tensor._shape = shape
        tensor._storage = storage
        return tensor

    @classmethod
    def from_numpy(cls, array: Any, dtype: Optional[Union[DType, str, Any]] = None) -> 'Tensor':
        """Create a tensor holding a copy of `array` (anything np.asarray accepts)."""
        arr = np.asarray(array)
        dtype = DType.coerce(arr.dtype if dtype is None else dtype)
        shape = normalize_shape(arr.shape)
        return cls._wrap(shape, Storage(arr.size, dtype, data=arr.reshape(-1)))

    @property
    def shape(self) -> Tuple[int, ...]:
        """Per-axis extents."""
        return self._shape

    @property
    def rank(self) -> int:
        """Number of axes."""
        return len(self._shape)

    @property
    def num_elements(self) -> int:
        return self._storage.size

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def strides(self) -> Tuple[int, ...]:
        """Buffer step per unit increment along each axis."""
        return row_major_strides(self._shape)

    def linear_index(self, coord: Sequence[int]) -> int:
        """
        Translate a multi-index into a position in the row-major buffer.

        Axes are checked from last to first, so when several coordinates are
        out of range the error names the highest such axis.

        Raises:
            IndexDimensionError: If len(coord) != rank
            IndexOutOfRangeError: If a coordinate is outside [0, extent)
        """
        coord = tuple(coord)
        if len(coord) != self.rank:
            raise IndexDimensionError(
                f"Index {coord} has {len(coord)} dimensions but tensor has rank {self.rank}"
            )
        if self.rank == 0:
            return 0

        linear = 0
        stride = 1
        for axis in range(self.rank - 1, -1, -1):
            index = operator.index(coord[axis])
            extent = self._shape[axis]
            if index < 0 or index >= extent:
                raise IndexOutOfRangeError(
                    f"Index {index} out of bounds for dimension {axis} with size {extent}"
                )
            linear += index * stride
            stride *= extent
        return linear

    def at(self, coord: Sequence[int], value: Any = _MISSING) -> Any:
        """Read the element at `coord`, or overwrite it when `value` is given."""
        idx = self.linear_index(coord)
        if value is _MISSING:
            return self._storage[idx].item()
        self._storage[idx] = value

    def value_at(self, index: int, value: Any = _MISSING) -> Any:
        """Read the element at linear `index`, or overwrite it when `value` is given."""
        index = operator.index(index)
        if index < 0 or index >= self._storage.size:
            raise LinearIndexOutOfRangeError(
                f"Linear index {index} out of bounds for tensor with {self._storage.size} elements"
            )
        if value is _MISSING:
            return self._storage[index].item()
        self._storage[index] = value

    def __getitem__(self, coord) -> Any:
        if not isinstance(coord, tuple):
            coord = (coord,)
        return self.at(coord)

    def __setitem__(self, coord, value: Any):
        if not isinstance(coord, tuple):
            coord = (coord,)
        self.at(coord, value)

    # Mutable and multi-dimensional: neither hashing nor flat iteration.
    __hash__ = None
    __iter__ = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        if self.rank != other.rank:
            return False
        if self._shape != other._shape:
            return False
        return self._storage.numpy().tolist() == other._storage.numpy().tolist()

    def copy(self) -> 'Tensor':
        """Deep copy: same shape and values, independent buffer."""
        return type(self)._wrap(self._shape, self._storage.clone())

    def __copy__(self) -> 'Tensor':
        return self.copy()

    def __deepcopy__(self, memo) -> 'Tensor':
        return self.copy()

    def move(self) -> 'Tensor':
        """
        Transfer the buffer to a new tensor.

        This tensor is reset to rank 0 holding a single zero of its dtype.
        No element is copied.
        """
        moved = type(self)._wrap(self._shape, self._storage)
        self._shape = ()
        self._storage = Storage(1, self._dtype)
        return moved

    def numpy(self) -> np.ndarray:
        """Independent numpy copy with this tensor's shape."""
        return self._storage.numpy().copy().reshape(self._shape)

    def __repr__(self) -> str:
        data_str = np.array2string(self.numpy(), precision=4, suppress_small=True)
        return f"Tensor({data_str}, dtype={self._dtype})"
