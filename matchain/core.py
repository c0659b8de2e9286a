# matchain/core.py
"""
Core utilities for matchain.

This module provides shape validation, test matrix generation, timing and
comparison helpers that are used throughout the package and its examples.
"""

import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

# =============================================================================
# Shape Utilities
# =============================================================================

def validate_chain_shapes(shapes: Sequence[Tuple[int, int]]) -> Optional[int]:
    """
    Check that every adjacent pair of shapes is conformable.

    Args:
        shapes: Matrix shapes in chain order

    Returns:
        Index of the first non-conformable pair, or None if the chain conforms
    """
    for i in range(len(shapes) - 1):
        if shapes[i][1] != shapes[i + 1][0]:
            return i
    return None

def chain_dims(shapes: Sequence[Tuple[int, int]]) -> List[int]:
    """
    Build the dimension vector of a conformable chain.

    ``dims[0]`` is the row count of the first matrix and ``dims[i]`` the
    column count of the i-th matrix, so matrix ``i`` (1-based) is
    ``dims[i-1] x dims[i]``.
    """
    if not shapes:
        return []
    return [shapes[0][0]] + [shape[1] for shape in shapes]

def generate_chain_matrices(dims: Sequence[int],
                            dtype: np.dtype = np.float32,
                            seed: Optional[int] = None) -> List[np.ndarray]:
    """
    Generate reproducible random arrays for a dimension vector.

    Args:
        dims: Dimension vector, ``len(dims) - 1`` matrices are generated
        dtype: NumPy floating-point data type
        seed: Random seed for reproducibility

    Returns:
        List of arrays, the i-th one shaped ``dims[i] x dims[i+1]``
    """
    rng = np.random.default_rng(seed)
    # Small range keeps long float32 chains away from overflow
    return [rng.uniform(-0.5, 0.5, (dims[i], dims[i + 1])).astype(dtype)
            for i in range(len(dims) - 1)]

def evaluate_left_to_right(arrays: Sequence[np.ndarray]) -> np.ndarray:
    """Multiply arrays strictly left to right with NumPy."""
    result = arrays[0]
    for array in arrays[1:]:
        result = result @ array
    return result

# =============================================================================
# Performance Utilities
# =============================================================================

class Timer:
    """High-resolution timer for performance measurements."""

    def __init__(self):
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.stop()

    def start(self):
        """Start the timer."""
        self.start_time = time.perf_counter()

    def stop(self):
        """Stop the timer."""
        self.end_time = time.perf_counter()

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000

# =============================================================================
# Debugging and Diagnostics
# =============================================================================

def compare_matrices(A: np.ndarray, B: np.ndarray,
                     rtol: float = 1e-5, atol: float = 1e-6) -> Dict[str, Any]:
    """
    Compare two arrays and summarize their differences.

    Args:
        A, B: Arrays to compare
        rtol: Relative tolerance
        atol: Absolute tolerance

    Returns:
        Dictionary with comparison results
    """
    if A.shape != B.shape:
        return {
            'shapes_match': False,
            'A_shape': A.shape,
            'B_shape': B.shape,
            'error': 'Shape mismatch'
        }

    if A.size == 0:
        return {'shapes_match': True, 'matrices_close': True, 'max_absolute_error': 0.0}

    diff = np.abs(A - B)
    return {
        'shapes_match': True,
        'matrices_close': bool(np.allclose(A, B, rtol=rtol, atol=atol)),
        'max_absolute_error': float(np.max(diff)),
        'mean_absolute_error': float(np.mean(diff)),
        'tolerance_used': {'rtol': rtol, 'atol': atol},
    }

def format_table(table: np.ndarray, width: int = 8) -> str:
    """
    Format a 2D integer table inside a simple box, one row per line.

    Used to dump the planner's cost and split tables.
    """
    rows, cols = table.shape
    border = "+-" + " " * (width * cols) + "-+"
    lines = [border]
    for r in range(rows):
        lines.append("| " + "".join(f"{int(v):>{width}}" for v in table[r]) + " |")
    lines.append(border)
    return "\n".join(lines)

__all__ = [
    # Shapes
    'validate_chain_shapes', 'chain_dims', 'generate_chain_matrices',
    'evaluate_left_to_right',

    # Performance
    'Timer',

    # Debugging
    'compare_matrices', 'format_table',
]
