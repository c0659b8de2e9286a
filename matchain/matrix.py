# matchain/matrix.py
"""
Dense 2D floating-point matrix handle with shared storage.

Several Matrix handles may refer to the same storage record (name plus
element array). Copying a handle shares the record instead of duplicating
it, so an element written through one handle is visible through all of
them. Storage lives as long as its last handle.
"""

from typing import Optional, Tuple

import numpy as np

from .config import ChainConfig


class _MatrixStorage:
    """Storage record shared by every handle copied from one matrix."""
    __slots__ = ("name", "data")

    def __init__(self, name: str, data: np.ndarray):
        self.name = name
        self.data = data


def _empty_data(dtype) -> np.ndarray:
    return np.zeros((0, 0), dtype=dtype)


def _check_floating(dtype) -> None:
    if not np.issubdtype(dtype, np.floating):
        raise ValueError(f"Matrix data must be floating-point, got {np.dtype(dtype)}")


class Matrix:
    """
    A 2D matrix of floats.

    A matrix with zero rows or zero columns is empty and participates in
    no multiplication. Elements are read and written as ``m[i, j]``.
    """

    def __init__(self, rows: int = 0, cols: int = 0, name: str = "empty",
                 dtype: np.dtype = np.float32):
        _check_floating(dtype)
        if rows > 0 and cols > 0:
            data = np.zeros((rows, cols), dtype=dtype)
        else:
            data = _empty_data(dtype)
        self._storage = _MatrixStorage(name, data)

    @classmethod
    def from_array(cls, array, name: str = "M", dtype: Optional[np.dtype] = None) -> "Matrix":
        """
        Wrap a 2D floating-point array.

        The array is used as the matrix storage without copying when its
        dtype already matches; otherwise it is converted once.

        Raises:
            ValueError: If the array is not 2-dimensional or not floating-point
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Matrix data must be 2-dimensional, got shape {array.shape}")
        if dtype is not None:
            array = array.astype(dtype, copy=False)
        _check_floating(array.dtype)
        if array.shape[0] == 0 or array.shape[1] == 0:
            array = _empty_data(array.dtype)

        matrix = cls.__new__(cls)
        matrix._storage = _MatrixStorage(name, array)
        return matrix

    @classmethod
    def from_product(cls, accumulator, config: Optional[ChainConfig] = None) -> "Matrix":
        """
        Close a chain expression and return its product.

        Equivalent to ``finalize(accumulator, config).unwrap().product``.

        Raises:
            ChainError: If the chain is empty or not conformable
        """
        from .chain import finalize
        return finalize(accumulator, config).unwrap().product

    # -------------------------------------------------------------------------
    # Identity and dimensions
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._storage.name

    @name.setter
    def name(self, value: str) -> None:
        self._storage.name = value

    def set_name(self, name: str) -> None:
        self._storage.name = name

    @property
    def rows(self) -> int:
        return self._storage.data.shape[0]

    @property
    def cols(self) -> int:
        return self._storage.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self._storage.data.dtype

    def is_empty(self) -> bool:
        return self.rows == 0 or self.cols == 0

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(
                f"Element ({i}, {j}) out of range for {self.rows}x{self.cols} matrix '{self.name}'"
            )

    def element(self, i: int, j: int) -> float:
        self._check_index(i, j)
        return self._storage.data[i, j]

    def set_element(self, i: int, j: int, value: float) -> None:
        self._check_index(i, j)
        self._storage.data[i, j] = value

    def __getitem__(self, index):
        i, j = index
        return self.element(i, j)

    def __setitem__(self, index, value):
        i, j = index
        self.set_element(i, j, value)

    def to_array(self) -> np.ndarray:
        """Return the backing array (shared, not copied)."""
        return self._storage.data

    # -------------------------------------------------------------------------
    # Shared-ownership copies
    # -------------------------------------------------------------------------

    def share(self) -> "Matrix":
        """Return a new handle on the same storage."""
        handle = Matrix.__new__(Matrix)
        handle._storage = self._storage
        return handle

    __copy__ = share

    def shares_storage_with(self, other: "Matrix") -> bool:
        return self._storage is other._storage

    # -------------------------------------------------------------------------
    # Chain operators
    # -------------------------------------------------------------------------

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        from .chain import start
        return start(self, other)

    __matmul__ = __mul__

    def __repr__(self) -> str:
        return f"Matrix('{self.name}', {self.rows}x{self.cols})"
