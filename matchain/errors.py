# matchain/errors.py
"""
Exception types raised (or carried in a ChainResult) by matchain.
"""

from typing import Tuple


class ChainError(Exception):
    """Base exception for matrix chain errors."""
    pass


class EmptyChainError(ChainError):
    """Finalize was called on a chain holding no matrices."""

    def __init__(self, message: str = "Cannot finalize an empty matrix chain"):
        super().__init__(message)


class DimensionMismatchError(ChainError):
    """Adjacent matrices in the chain are not conformable."""

    def __init__(self, index: int, left_shape: Tuple[int, int], right_shape: Tuple[int, int]):
        self.index = index
        self.left_shape = tuple(left_shape)
        self.right_shape = tuple(right_shape)
        super().__init__(
            f"Matrix dimensions incompatible at chain position {index}: "
            f"{left_shape[0]}x{left_shape[1]} followed by {right_shape[0]}x{right_shape[1]}"
        )


class ChainStateError(ChainError):
    """Accumulator used after it has already been finalized."""
    pass
