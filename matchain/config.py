# matchain/config.py
"""
Configuration for chain planning and execution.
"""

from dataclasses import dataclass, field

import numpy as np

KERNEL_NAMES = ("loops", "numpy")


@dataclass
class ChainConfig:
    """Settings shared by finalize, ChainEngine and Matrix.from_product."""
    kernel: str = "loops"
    dtype: np.dtype = field(default_factory=lambda: np.dtype(np.float32))
    log_tables: bool = False

    def __post_init__(self):
        if self.kernel not in KERNEL_NAMES:
            raise ValueError(f"Unknown kernel '{self.kernel}', expected one of {KERNEL_NAMES}")
        self.dtype = np.dtype(self.dtype)
        if not np.issubdtype(self.dtype, np.floating):
            raise ValueError(f"Matrix dtype must be floating-point, got {self.dtype}")


DEFAULT_CONFIG = ChainConfig()
