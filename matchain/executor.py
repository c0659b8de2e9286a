# matchain/executor.py
"""
Plan-guided execution of a matrix chain.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from .matrix import Matrix
from .planner import ChainPlan


def naive_cost(matrices: Sequence[Matrix]) -> int:
    """
    Multiplication count reported for serial evaluation of the chain.

    Sums ``rows(i) * cols(i) * cols(i+1)`` over adjacent pairs. This is a
    comparison baseline only; nothing is multiplied.
    """
    cost = 0
    for i in range(len(matrices) - 1):
        cost += matrices[i].rows * matrices[i].cols * matrices[i + 1].cols
    return cost


def _result_dtype(left: Matrix, right: Matrix, dtype) -> np.dtype:
    return np.dtype(dtype) if dtype is not None else np.result_type(left.dtype, right.dtype)


def multiply_loops(left: Matrix, right: Matrix, dtype=None) -> Tuple[Matrix, int]:
    """
    Dense triple-loop product. Returns the product and its multiplication count.

    The product is built in ``dtype``, or the operands' common dtype when None.
    """
    result = Matrix(left.rows, right.cols, f"({left.name}*{right.name})",
                    dtype=_result_dtype(left, right, dtype))
    a = left.to_array()
    b = right.to_array()
    c = result.to_array()

    mults = 0
    for i in range(left.rows):
        for j in range(right.cols):
            total = 0.0
            for k in range(left.cols):
                total += a[i, k] * b[k, j]
            c[i, j] = total
            mults += left.cols
    return result, mults


def multiply_numpy(left: Matrix, right: Matrix, dtype=None) -> Tuple[Matrix, int]:
    """NumPy product, counted as the triple loop would count it."""
    name = f"({left.name}*{right.name})"
    dtype = _result_dtype(left, right, dtype)
    if left.is_empty() or right.is_empty():
        return Matrix(left.rows, right.cols, name, dtype=dtype), 0
    product = np.matmul(left.to_array(), right.to_array())
    return Matrix.from_array(product, name, dtype=dtype), left.rows * right.cols * left.cols


KERNELS = {
    "loops": multiply_loops,
    "numpy": multiply_numpy,
}


class ChainExecutor:
    """
    Multiplies a validated chain in the order recorded by a ChainPlan.

    ``mults`` accumulates the scalar multiplications actually performed.
    Intermediate and final products are built in ``dtype`` when given.
    """

    def __init__(self, matrices: Sequence[Matrix], plan: ChainPlan, kernel: str = "loops",
                 dtype: Optional[np.dtype] = None):
        if len(matrices) != plan.length:
            raise ValueError(
                f"Plan covers {plan.length} matrices but {len(matrices)} were given"
            )
        self.matrices = list(matrices)
        self.plan = plan
        self._multiply = KERNELS[kernel]
        self.dtype = dtype
        self.mults = 0

    def multiply_range(self, i: int, j: int) -> Matrix:
        """Product of matrices ``i..j`` (1-based, inclusive)."""
        if i == j:
            return self.matrices[i - 1]

        k = self.plan.split_point(i, j)
        left = self.multiply_range(i, k)
        right = self.multiply_range(k + 1, j)
        product, mults = self._multiply(left, right, self.dtype)
        self.mults += mults
        return product

    def run(self) -> Tuple[Matrix, int]:
        self.mults = 0
        product = self.multiply_range(1, self.plan.length)
        return product, self.mults
