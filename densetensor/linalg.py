"""Rank-constrained tensor facades and the dense matrix-vector product."""

from __future__ import annotations
from typing import Any, Iterator, Optional, Tuple, Union
import numpy as np

from .core.storage import DType
from .errors import DimensionMismatchError, RankMismatchError
from .io import PathLike, read_tensor, write_tensor
from .tensor import Tensor


class _RankConstrained:
    """Owns exactly one Tensor whose rank is fixed by the subclass."""

    _rank: int
    _kind: str

    _tensor: Tensor

    @classmethod
    def _check_rank(cls, tensor: Tensor):
        if tensor.rank != cls._rank:
            raise RankMismatchError(
                f"Tensor of rank {tensor.rank} is not a valid {cls._kind} "
                f"(rank must be equal to {cls._rank})"
            )

    @classmethod
    def _adopt(cls, tensor: Tensor):
        cls._check_rank(tensor)
        obj = cls.__new__(cls)
        obj._tensor = tensor
        return obj

    @classmethod
    def from_tensor(cls, tensor: Tensor):
        """Wrap a copy of `tensor`; raises RankMismatchError on the wrong rank."""
        cls._check_rank(tensor)
        return cls._adopt(tensor.copy())

    @classmethod
    def from_file(cls, path: PathLike, dtype: Optional[Union[DType, str, Any]] = None):
        """
        Read from a tensor file.

        Files carry no component type: pass the writer's `dtype` for an exact
        round trip, otherwise the configured default_dtype is used.

        Raises:
            FileOpenError: If `path` cannot be opened
            ParseError: If the file is malformed
            RankMismatchError: If the stored tensor has the wrong rank
        """
        return cls._adopt(read_tensor(path, dtype=dtype))

    @property
    def tensor(self) -> Tensor:
        """The owned tensor."""
        return self._tensor

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._tensor.shape

    @property
    def dtype(self) -> DType:
        return self._tensor.dtype

    def to_file(self, path: PathLike):
        write_tensor(self._tensor, path)

    def copy(self):
        return type(self)._adopt(self._tensor.copy())

    def numpy(self) -> np.ndarray:
        return self._tensor.numpy()

    __hash__ = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._tensor == other._tensor

    def __repr__(self) -> str:
        data_str = np.array2string(self.numpy(), precision=4, suppress_small=True)
        return f"{self._kind}({data_str}, dtype={self.dtype})"


class Vector(_RankConstrained):
    """
    Rank-1 tensor.

    Example:
        >>> v = Vector(3, fill_value=2)
        >>> v[1] = 5
        >>> list(v)
        [2.0, 5.0, 2.0]
    """

    _rank = 1
    _kind = "Vector"

    def __init__(
        self,
        size: int = 0,
        fill_value: Optional[Any] = None,
        dtype: Optional[Union[DType, str, Any]] = None,
    ):
        self._tensor = Tensor((size,), fill_value, dtype=dtype)

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._tensor.shape[0]

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.size):
            yield self._tensor.value_at(i)

    def __getitem__(self, idx: int) -> Any:
        return self._tensor.at((idx,))

    def __setitem__(self, idx: int, value: Any):
        self._tensor.at((idx,), value)


class Matrix(_RankConstrained):
    """
    Rank-2 tensor addressed as ``matrix[row, col]``.

    Example:
        >>> m = Matrix(2, 3)
        >>> m[1, 2] = 7
        >>> m.rows, m.cols
        (2, 3)
    """

    _rank = 2
    _kind = "Matrix"

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        fill_value: Optional[Any] = None,
        dtype: Optional[Union[DType, str, Any]] = None,
    ):
        self._tensor = Tensor((rows, cols), fill_value, dtype=dtype)

    @property
    def rows(self) -> int:
        return self._tensor.shape[0]

    @property
    def cols(self) -> int:
        return self._tensor.shape[1]

    def __getitem__(self, idx: Tuple[int, int]) -> Any:
        return self._tensor.at(idx)

    def __setitem__(self, idx: Tuple[int, int], value: Any):
        self._tensor.at(idx, value)


def matvec(matrix: Matrix, vector: Vector) -> Vector:
    """
    Dense matrix-vector product.

    ``result[i] = sum_j matrix[i, j] * vector[j]``, accumulated in the
    component type's own arithmetic (so integer types wrap on overflow and
    float32 stays float32). When the operands' dtypes differ the result uses
    numpy's promoted type.

    Args:
        matrix: Matrix of shape (rows, cols)
        vector: Vector of size cols

    Returns:
        New Vector of size rows

    Raises:
        DimensionMismatchError: If matrix.cols != vector.size
    """
    rows, cols = matrix.rows, matrix.cols
    if cols != vector.size:
        raise DimensionMismatchError(
            f"Dimension mismatch: cannot multiply a {rows}x{cols} matrix "
            f"by a vector of size {vector.size}"
        )

    dtype = DType.coerce(np.result_type(matrix.dtype.numpy_dtype, vector.dtype.numpy_dtype))
    scalar = dtype.numpy_dtype
    result = Vector(rows, dtype=dtype)
    for i in range(rows):
        acc = dtype.zero()
        for j in range(cols):
            acc = acc + scalar(matrix[i, j]) * scalar(vector[j])
        result[i] = acc
    return result
