"""
Time discretization for Monte Carlo simulation.

A time grid is a finite, strictly increasing sequence of time points
t_0 < t_1 < ... < t_{N-1} measured in years.
"""

from dataclasses import dataclass, field

import numpy as np

from pathwise_xva._types import FloatArray, Year
from pathwise_xva.errors import InvalidGrid

# Tolerance used when comparing a time against grid points
TIME_TOLERANCE = 1e-12


@dataclass(frozen=True, eq=False)
class TimeGrid:
    """
    Strictly increasing sequence of time points.

    Attributes
    ----------
    times : FloatArray
        Read-only array of time points in years, shape (N,)

    Example
    -------
    >>> grid = TimeGrid.uniform(t0=0.0, n=1000, dt=0.001)
    >>> grid.time(999)
    0.999
    >>> grid.nearest_index_less_or_equal(0.5004)
    500
    """

    times: FloatArray = field(repr=False)

    def __post_init__(self) -> None:
        """Validate and freeze the time points."""
        times = np.array(self.times, dtype=np.float64).ravel()

        if times.size == 0:
            raise InvalidGrid("Time grid must contain at least one point")
        if not np.all(np.isfinite(times)):
            raise InvalidGrid("Time grid contains non-finite values")
        if times.size > 1 and not np.all(np.diff(times) > 0):
            raise InvalidGrid("Time grid must be strictly increasing")

        times.flags.writeable = False
        object.__setattr__(self, "times", times)

    @classmethod
    def uniform(cls, t0: Year, n: int, dt: float) -> "TimeGrid":
        """
        Create a uniform grid t_i = t0 + i * dt for i = 0..n-1.

        Parameters
        ----------
        t0 : float
            Initial time
        n : int
            Number of time points
        dt : float
            Step size in years

        Returns
        -------
        TimeGrid
            Uniform grid with n points
        """
        if n < 1:
            raise InvalidGrid(f"Number of time points must be >= 1, got {n}")
        if not dt > 0:
            raise InvalidGrid(f"Time step must be positive, got {dt}")

        return cls(times=t0 + dt * np.arange(n, dtype=np.float64))

    def time(self, index: int) -> float:
        """Return t_index."""
        return float(self.times[index])

    @property
    def length(self) -> int:
        """Number of time points N."""
        return int(self.times.size)

    def __len__(self) -> int:
        return self.length

    def __iter__(self):
        return iter(self.times.tolist())

    @property
    def initial_time(self) -> float:
        """First time point t_0."""
        return float(self.times[0])

    @property
    def horizon(self) -> float:
        """Last time point t_{N-1}."""
        return float(self.times[-1])

    @property
    def deltas(self) -> FloatArray:
        """Step sizes t_i - t_{i-1}, shape (N - 1,)."""
        return np.diff(self.times)

    @property
    def is_uniform(self) -> bool:
        """True if all steps have (numerically) the same size."""
        if self.length < 3:
            return True
        deltas = self.deltas
        return bool(np.allclose(deltas, deltas[0], rtol=1e-9, atol=0.0))

    def step_weights(self) -> FloatArray:
        """
        Left-rectangle quadrature weights for every grid point.

        Weight i is the forward step t_{i+1} - t_i; the last point reuses
        the last step. On a uniform grid all weights equal dt.

        Returns
        -------
        FloatArray
            Weights, shape (N,)

        Raises
        ------
        InvalidGrid
            If the grid has a single point (no step size is defined)
        """
        if self.length < 2:
            raise InvalidGrid("Quadrature weights need at least two time points")

        deltas = self.deltas
        return np.append(deltas, deltas[-1])

    def contains(self, t: Year) -> bool:
        """True if t lies in [t_0, t_{N-1}] (inclusive, up to tolerance)."""
        return (
            self.initial_time - TIME_TOLERANCE <= t <= self.horizon + TIME_TOLERANCE
        )

    def nearest_index_less_or_equal(self, t: Year) -> int:
        """
        Return the largest index i with t_i <= t.

        Times below t_0 clamp to 0, times above t_{N-1} clamp to N - 1.

        Parameters
        ----------
        t : float
            Query time in years

        Returns
        -------
        int
            Grid index
        """
        index = int(np.searchsorted(self.times, t + TIME_TOLERANCE, side="right")) - 1
        return min(max(index, 0), self.length - 1)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"TimeGrid(n={self.length}, "
            f"t0={self.initial_time:.4f}, horizon={self.horizon:.4f})"
        )
