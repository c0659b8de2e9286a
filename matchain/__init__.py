# matchain/__init__.py
"""
matchain: operand-collecting matrix chain multiplication

Chained products such as ``a * b * c * d`` are collected without computing
anything, then multiplied in the order that needs the fewest scalar
multiplications.
"""

from .matrix import Matrix
from .chain import (ChainAccumulator, ChainResult, ChainState, PlanResult,
                    append, finalize, start)
from .planner import ChainPlan, ChainPlanner, plan_chain
from .executor import ChainExecutor, naive_cost
from .config import ChainConfig
from .engine import ChainEngine, create_engine
from .errors import ChainError, ChainStateError, DimensionMismatchError, EmptyChainError

# Import submodules
from . import core

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    "Matrix",
    "ChainAccumulator", "ChainResult", "ChainState", "PlanResult",
    "start", "append", "finalize",
    "ChainPlan", "ChainPlanner", "plan_chain",
    "ChainExecutor", "naive_cost",
    "ChainConfig", "ChainEngine", "create_engine",
    "ChainError", "ChainStateError", "DimensionMismatchError", "EmptyChainError",
    "core",
    "__version__",
]

def version():
    """Return version string."""
    return __version__
