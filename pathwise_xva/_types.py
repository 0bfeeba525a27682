"""
Common type aliases used throughout the pathwise xVA engine.

This module defines type aliases for numpy arrays and scalar quantities
to improve code readability and enable better static type checking.
"""

from typing import TypeAlias

import numpy as np
import numpy.typing as npt

# Array type aliases
FloatArray: TypeAlias = npt.NDArray[np.float64]
"""1D or 2D array of 64-bit floats."""

PathArray: TypeAlias = npt.NDArray[np.float64]
"""
2D array of shape (n_steps, n_paths) holding Monte Carlo realisations.

Each row is one time slice (stored contiguously), each column is a path.
"""

# Scalar type aliases
Rate: TypeAlias = float
"""Continuously compounded rate as a decimal (e.g., 0.01 for 1%)."""

Year: TypeAlias = float
"""Time measured in years (e.g., 0.25 for quarterly)."""
