"""
Exposure metrics calculation for xVA.

Provides functions to compute, per time slice and per series:
- EPE (Expected Positive Exposure)
- ENE (Expected Negative Exposure, a non-positive number)
- PFE (Potential Future Exposure at a quantile level)
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from pathwise_xva._types import FloatArray, Year
from pathwise_xva.exposure.engine import ExposureSeries
from pathwise_xva.stochastic.random_variable import RandomVariable
from pathwise_xva.stochastic.time_grid import TimeGrid


def expected_positive_exposure(exposure: RandomVariable) -> float:
    """EPE(X) = mean(floor(X, 0))."""
    return exposure.floor(0.0).mean()


def expected_negative_exposure(exposure: RandomVariable) -> float:
    """ENE(X) = mean(cap(X, 0)); non-positive."""
    return exposure.cap(0.0).mean()


def potential_future_exposure(exposure: RandomVariable, quantile: float = 0.95) -> float:
    """PFE(X; α) = quantile(X, α) of the signed exposure."""
    return exposure.quantile(quantile)


def calculate_epe(series: ExposureSeries) -> FloatArray:
    """
    Calculate Expected Positive Exposure at each time step.

    EPE(t) = E[max(V(t), 0)]

    Parameters
    ----------
    series : ExposureSeries
        Pathwise MTM series

    Returns
    -------
    FloatArray
        EPE at each time step, shape (n_steps,)
    """
    return np.array([expected_positive_exposure(rv) for rv in series])


def calculate_ene(series: ExposureSeries) -> FloatArray:
    """
    Calculate Expected Negative Exposure at each time step.

    ENE(t) = E[min(V(t), 0)]

    The sign is kept, so ENE <= 0 and EPE + ENE equals the expected MTM.

    Parameters
    ----------
    series : ExposureSeries
        Pathwise MTM series

    Returns
    -------
    FloatArray
        ENE at each time step, shape (n_steps,)
    """
    return np.array([expected_negative_exposure(rv) for rv in series])


def calculate_pfe(series: ExposureSeries, quantile: float = 0.95) -> FloatArray:
    """
    Calculate Potential Future Exposure at each time step.

    PFE(t, α) = Quantile_α(V(t))

    Parameters
    ----------
    series : ExposureSeries
        Pathwise MTM series
    quantile : float
        Quantile level (default 0.95 for 95% PFE)

    Returns
    -------
    FloatArray
        PFE at each time step, shape (n_steps,)

    Example
    -------
    >>> pfe_95 = calculate_pfe(series, quantile=0.95)
    >>> pfe_99 = calculate_pfe(series, quantile=0.99)
    """
    return np.array([potential_future_exposure(rv, quantile) for rv in series])


class ExposureProfile(NamedTuple):
    """
    Precomputed curve (t_i, y_i) with step lookup.

    Replaces passing closures of time to the plotting layer: the
    collaborator consumes arrays, and ``at`` reproduces the
    nearest-index-less-or-equal evaluation.
    """

    time_grid: TimeGrid
    values: FloatArray

    def at(self, t: Year) -> float:
        """Value at the grid point nearest at or before t."""
        return float(self.values[self.time_grid.nearest_index_less_or_equal(t)])

    def sample(self, start: Year, end: Year, n_points: int) -> tuple[FloatArray, FloatArray]:
        """Evaluate on n_points equally spaced times in [start, end]."""
        times = np.linspace(start, end, n_points)
        return times, np.array([self.at(t) for t in times])


@dataclass
class ExposureMetrics:
    """
    Complete exposure metrics for one exposure series.

    Attributes
    ----------
    time_grid : FloatArray
        Time points in years
    epe : FloatArray
        Expected positive exposure at each time
    ene : FloatArray
        Expected negative exposure at each time (non-positive)
    pfe_95 : FloatArray
        95% PFE at each time
    pfe_99 : FloatArray
        99% PFE at each time
    expected_exposure : FloatArray
        Expected MTM at each time (EPE + ENE)
    peak_epe : float
        Maximum EPE across all times
    peak_ene : float
        Most negative ENE across all times
    average_epe : float
        Time-weighted average EPE
    average_ene : float
        Time-weighted average ENE
    """

    time_grid: FloatArray
    epe: FloatArray
    ene: FloatArray
    pfe_95: FloatArray
    pfe_99: FloatArray
    expected_exposure: FloatArray
    peak_epe: float
    peak_ene: float
    average_epe: float
    average_ene: float

    @classmethod
    def from_series(cls, series: ExposureSeries) -> "ExposureMetrics":
        """
        Calculate all exposure metrics from an exposure series.

        Parameters
        ----------
        series : ExposureSeries
            Pathwise MTM series

        Returns
        -------
        ExposureMetrics
            Complete exposure metrics
        """
        time_grid = np.asarray(series.time_grid.times)
        epe = calculate_epe(series)
        ene = calculate_ene(series)

        # Time-weighted averages
        dt = np.diff(time_grid, prepend=time_grid[0])
        total_time = time_grid[-1] - time_grid[0]
        if total_time > 0:
            average_epe = float(np.sum(epe * dt) / total_time)
            average_ene = float(np.sum(ene * dt) / total_time)
        else:
            average_epe = float(epe[0])
            average_ene = float(ene[0])

        return cls(
            time_grid=time_grid,
            epe=epe,
            ene=ene,
            pfe_95=calculate_pfe(series, quantile=0.95),
            pfe_99=calculate_pfe(series, quantile=0.99),
            expected_exposure=series.expected_exposure(),
            peak_epe=float(np.max(epe)),
            peak_ene=float(np.min(ene)),
            average_epe=average_epe,
            average_ene=average_ene,
        )

    def profile(self, name: str) -> ExposureProfile:
        """
        Return one curve as an ExposureProfile.

        Parameters
        ----------
        name : str
            One of 'epe', 'ene', 'pfe_95', 'pfe_99', 'expected_exposure'
        """
        return ExposureProfile(
            time_grid=TimeGrid(self.time_grid), values=getattr(self, name)
        )
