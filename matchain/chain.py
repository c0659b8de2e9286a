# matchain/chain.py
"""
Operand-collecting matrix chain multiplication.

An expression such as ``a * b * c`` does not multiply anything. The first
``*`` builds a ChainAccumulator holding ``a`` and ``b``; every further
``*`` appends one more matrix. The chain is only computed when it is
closed with ``finalize`` (or ``Matrix.from_product``), at which point its
dimensions are validated, the cheapest multiplication order is planned and
the product is computed in that order.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .config import ChainConfig, DEFAULT_CONFIG
from .core import validate_chain_shapes
from .errors import ChainError, ChainStateError, DimensionMismatchError, EmptyChainError
from .executor import ChainExecutor, naive_cost
from .matrix import Matrix
from .planner import ChainPlan, ChainPlanner

logger = logging.getLogger(__name__)


class ChainState(enum.Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    VALIDATED = "validated"
    COMPUTED = "computed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PlanResult:
    """Product of a finalized chain and the two multiplication counts."""
    product: Matrix
    naive_cost: int
    optimized_cost: int
    plan: Optional[ChainPlan] = None


@dataclass(frozen=True)
class ChainResult:
    """Outcome of finalize: either a PlanResult or the ChainError that stopped it."""
    value: Optional[PlanResult] = None
    error: Optional[ChainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PlanResult:
        if self.error is not None:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        return self.ok


class ChainAccumulator:
    """
    Ordered collection of Matrix operands awaiting one evaluation.

    Insertion order is multiplication order. Nothing is validated or
    computed until ``finalize``; an accumulator can be finalized once.
    """

    def __init__(self, *matrices: Matrix):
        self._matrices = list(matrices)
        self._state = ChainState.ACCUMULATING if matrices else ChainState.EMPTY

    @property
    def state(self) -> ChainState:
        return self._state

    @property
    def matrices(self) -> Tuple[Matrix, ...]:
        return tuple(self._matrices)

    def append(self, matrix: Matrix) -> "ChainAccumulator":
        self._check_open()
        self._matrices.append(matrix)
        self._state = ChainState.ACCUMULATING
        return self

    def finalize(self, config: Optional[ChainConfig] = None) -> ChainResult:
        return finalize(self, config)

    def _check_open(self) -> None:
        if self._state not in (ChainState.EMPTY, ChainState.ACCUMULATING):
            raise ChainStateError(f"Matrix chain already finalized ({self._state.value})")

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.append(other)

    __matmul__ = __mul__

    def __len__(self) -> int:
        return len(self._matrices)

    def __iter__(self) -> Iterator[Matrix]:
        return iter(self._matrices)

    def __repr__(self) -> str:
        names = " * ".join(m.name for m in self._matrices)
        return f"ChainAccumulator({names or '<empty>'}, state={self._state.value})"


def start(m1: Matrix, m2: Matrix) -> ChainAccumulator:
    """Begin a chain with two matrices, in order."""
    return ChainAccumulator(m1, m2)


def append(accumulator: ChainAccumulator, matrix: Matrix) -> ChainAccumulator:
    """Append one matrix to a chain and return the same accumulator."""
    return accumulator.append(matrix)


def _reject(accumulator: ChainAccumulator, error: ChainError) -> ChainResult:
    accumulator._state = ChainState.REJECTED
    logger.info("Matrix chain rejected: %s", error)
    return ChainResult(error=error)


def finalize(accumulator: ChainAccumulator, config: Optional[ChainConfig] = None) -> ChainResult:
    """
    Validate, plan and compute an accumulated chain.

    Args:
        accumulator: Chain to close; it cannot be reused afterwards
        config: Kernel and logging settings (default: ChainConfig())

    Returns:
        ChainResult holding a PlanResult, or an EmptyChainError /
        DimensionMismatchError when the chain cannot be multiplied

    Raises:
        ChainStateError: If the accumulator was already finalized
    """
    accumulator._check_open()
    config = config or DEFAULT_CONFIG
    matrices = accumulator._matrices

    if not matrices:
        return _reject(accumulator, EmptyChainError())

    if len(matrices) == 1:
        accumulator._state = ChainState.COMPUTED
        return ChainResult(value=PlanResult(matrices[0].share(), 0, 0))

    shapes = [m.shape for m in matrices]
    index = validate_chain_shapes(shapes)
    if index is not None:
        return _reject(accumulator, DimensionMismatchError(index, shapes[index], shapes[index + 1]))
    accumulator._state = ChainState.VALIDATED

    plan = ChainPlanner(log_tables=config.log_tables).plan(matrices)
    product, optimized = ChainExecutor(matrices, plan, kernel=config.kernel,
                                       dtype=config.dtype).run()
    naive = naive_cost(matrices)
    accumulator._state = ChainState.COMPUTED

    logger.debug("Computed chain of %d matrices as %s: naive cost %d, optimized cost %d",
                 len(matrices), product.name, naive, optimized)
    return ChainResult(value=PlanResult(product, naive, optimized, plan))
