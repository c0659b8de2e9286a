#!/usr/bin/env python3
"""
matchain engine

This module provides a small facade over accumulate / finalize that carries
one ChainConfig, plus a benchmark comparing planned and serial evaluation.
"""
# matchain/engine.py

from typing import Optional, Sequence

from .chain import ChainAccumulator, PlanResult, finalize
from .config import ChainConfig
from .core import Timer, compare_matrices, evaluate_left_to_right, generate_chain_matrices
from .matrix import Matrix


class ChainEngine:
    """
    Evaluates matrix chains with a fixed configuration.

    Usage::

        with ChainEngine(kernel="numpy") as engine:
            result = engine.evaluate(a * b * c)
    """

    def __init__(self, config: Optional[ChainConfig] = None, **kwargs):
        """
        Initialize the engine.

        Args:
            config: Complete configuration; mutually exclusive with kwargs
            **kwargs: ChainConfig fields (kernel, dtype, log_tables)
        """
        if config is not None and kwargs:
            raise ValueError("Pass either a ChainConfig or keyword settings, not both")
        self.config = config if config is not None else ChainConfig(**kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def __repr__(self) -> str:
        return f"ChainEngine(kernel={self.config.kernel}, dtype={self.config.dtype})"

    def evaluate(self, accumulator: ChainAccumulator) -> PlanResult:
        """Finalize a chain, raising its ChainError on failure."""
        return finalize(accumulator, self.config).unwrap()

    def multiply(self, *matrices: Matrix) -> PlanResult:
        """Accumulate the given matrices in order and evaluate them."""
        return self.evaluate(ChainAccumulator(*matrices))

    def benchmark_chain(self, dims: Sequence[int], iterations: int = 10,
                        seed: Optional[int] = None) -> dict:
        """
        Time planned evaluation of a random chain against serial NumPy evaluation.

        Args:
            dims: Dimension vector describing the chain
            iterations: Timed repetitions of each method
            seed: Random seed for the generated matrices
        """
        if len(dims) < 2 or min(dims) <= 0:
            raise ValueError(f"Benchmark chains need positive dimensions, got {list(dims)}")
        arrays = generate_chain_matrices(dims, dtype=self.config.dtype, seed=seed)
        names = [f"A{i}" for i in range(1, len(arrays) + 1)]
        matrices = [Matrix.from_array(a, name) for a, name in zip(arrays, names)]

        # Warmup
        result = self.multiply(*matrices)
        reference = evaluate_left_to_right(arrays)

        with Timer() as planned:
            for _ in range(iterations):
                result = self.multiply(*matrices)

        with Timer() as serial:
            for _ in range(iterations):
                reference = evaluate_left_to_right(arrays)

        comparison = compare_matrices(result.product.to_array(), reference)
        planned_time = planned.elapsed / iterations
        serial_time = serial.elapsed / iterations

        return {
            'chain': " x ".join(f"{dims[i]}x{dims[i + 1]}" for i in range(len(dims) - 1)),
            'order': result.plan.parenthesization(names) if result.plan else names[0],
            'naive_cost': result.naive_cost,
            'optimized_cost': result.optimized_cost,
            'planned_time_ms': planned_time * 1000,
            'serial_time_ms': serial_time * 1000,
            'speedup': serial_time / planned_time if planned_time > 0 else float('inf'),
            'max_error': comparison['max_absolute_error'],
            'results_match': comparison['matrices_close'],
            'kernel': self.config.kernel,
        }


def create_engine(**kwargs) -> ChainEngine:
    """Create a ChainEngine with default parameters."""
    return ChainEngine(**kwargs)
