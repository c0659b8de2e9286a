# matchain/planner.py
"""
Matrix chain order planning.

The planner implements the matrix-chain dynamic program from Cormen,
Leiserson and Rivest, "Introduction to Algorithms".
Only the dimensions of the matrices matter; element values are never read.

Tables are 1-indexed over chain positions: ``cost[i, j]`` is the minimum
number of scalar multiplications needed to form ``A[i] .. A[j]`` and
``split[i, j]`` is the ``k`` at which that product splits into
``(A[i] .. A[k]) (A[k+1] .. A[j])``.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .core import chain_dims, format_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ChainPlan:
    """Cost and split tables for one chain; row 0 and column 0 are unused."""
    dims: Tuple[int, ...]
    cost: np.ndarray
    split: np.ndarray

    @property
    def length(self) -> int:
        return len(self.dims) - 1

    @property
    def min_cost(self) -> int:
        return int(self.cost[1, self.length])

    def split_point(self, i: int, j: int) -> int:
        return int(self.split[i, j])

    def parenthesization(self, names: Optional[Sequence[str]] = None) -> str:
        """
        Render the optimal grouping, e.g. ``((A(BC))((DE)F))``.

        Args:
            names: Operand names in chain order (default ``A1``, ``A2``, ...)
        """
        if names is None:
            names = [f"A{i}" for i in range(1, self.length + 1)]

        def render(i, j):
            if i == j:
                return names[i - 1]
            k = self.split_point(i, j)
            return f"({render(i, k)}{render(k + 1, j)})"

        return render(1, self.length)


def plan_chain(dims: Sequence[int]) -> ChainPlan:
    """
    Compute the minimum-cost parenthesization for a dimension vector.

    Args:
        dims: ``dims[0]`` is the row count of the first matrix and
            ``dims[i]`` the column count of matrix ``i`` (1-based)

    Returns:
        ChainPlan with freshly computed tables

    Raises:
        ValueError: If fewer than two matrices are described
    """
    dims = tuple(int(d) for d in dims)
    n = len(dims) - 1
    if n < 2:
        raise ValueError(f"A chain plan needs at least two matrices, got {max(n, 0)}")

    cost = np.zeros((n + 1, n + 1), dtype=np.int64)
    split = np.zeros((n + 1, n + 1), dtype=np.int64)

    for length in range(2, n + 1):
        for i in range(1, n - length + 2):
            j = i + length - 1
            best = None
            for k in range(i, j):
                q = int(cost[i, k]) + int(cost[k + 1, j]) + dims[i - 1] * dims[k] * dims[j]
                # Strict comparison: the lowest k wins ties.
                if best is None or q < best:
                    best = q
                    split[i, j] = k
            cost[i, j] = best

    cost.flags.writeable = False
    split.flags.writeable = False
    return ChainPlan(dims=dims, cost=cost, split=split)


class ChainPlanner:
    """Builds ChainPlans for validated chains of Matrix handles."""

    def __init__(self, log_tables: bool = False):
        self.log_tables = log_tables

    def plan(self, matrices) -> ChainPlan:
        plan = plan_chain(chain_dims([m.shape for m in matrices]))
        if self.log_tables and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Cost table\n%s", format_table(plan.cost))
            logger.debug("Split table\n%s", format_table(plan.split))
        return plan
