"""
Programmatic interface.

Thin functional wrappers over the model, engine and calculators, for
callers that do not need the object layer.
"""

import numpy as np

from pathwise_xva._types import FloatArray
from pathwise_xva.errors import InvalidGrid
from pathwise_xva.exposure.engine import ExposureEngine, ExposureSeries
from pathwise_xva.exposure.metrics import calculate_ene, calculate_epe, calculate_pfe
from pathwise_xva.instruments.base import Instrument
from pathwise_xva.market.black_scholes import AssetPaths, BlackScholesModel
from pathwise_xva.stochastic.time_grid import TimeGrid
from pathwise_xva.xva.cva import CVACalculator
from pathwise_xva.xva.discva import DiscVACalculator


def simulate(
    grid: TimeGrid,
    n_paths: int,
    initial_value: float,
    collateral_rate: float,
    volatility: float,
    seed: int | None = None,
) -> AssetPaths:
    """
    Simulate Black-Scholes paths S[i, p] on ``grid``.

    Example
    -------
    >>> paths = simulate(TimeGrid.uniform(0.0, 1000, 0.001), 10_000, 100.0, 0.01, 0.25, 3141)
    """
    return BlackScholesModel(
        time_grid=grid,
        n_paths=n_paths,
        initial_value=initial_value,
        risk_free_rate=collateral_rate,
        volatility=volatility,
        seed=seed,
    ).simulate()


def exposure_series(
    paths: AssetPaths, deal: Instrument, collateral_rate: float
) -> ExposureSeries:
    """Pathwise MTM of ``deal`` at every grid time, E[0] anchored analytically."""
    return ExposureEngine(collateral_rate=collateral_rate).calculate(paths, deal)


def epe(series: ExposureSeries) -> FloatArray:
    """Expected positive exposure curve, shape (N,)."""
    return calculate_epe(series)


def ene(series: ExposureSeries) -> FloatArray:
    """Expected negative exposure curve (non-positive), shape (N,)."""
    return calculate_ene(series)


def pfe(series: ExposureSeries, alpha: float = 0.95) -> FloatArray:
    """Potential future exposure curve at level ``alpha``, shape (N,)."""
    return calculate_pfe(series, quantile=alpha)


def _check_grid(series: ExposureSeries, grid: TimeGrid | None) -> None:
    if grid is not None and not np.array_equal(grid.times, series.time_grid.times):
        raise InvalidGrid("Integration grid differs from the exposure grid")


def disc_va(
    series: ExposureSeries,
    collateral_rate: float,
    unsecured_rate: float,
    grid: TimeGrid | None = None,
) -> float:
    """
    Discounting valuation adjustment of ``series``.

    Parameters
    ----------
    series : ExposureSeries
        Pathwise MTM series
    collateral_rate : float
        Collateral rate r_c
    unsecured_rate : float
        Unsecured funding rate r_u
    grid : TimeGrid | None
        Integration grid; must match the series grid when given

    Returns
    -------
    float
        DiscVA = (r_c - r_u) Σᵢ E[V(tᵢ)] exp(-r_u tᵢ) wᵢ
    """
    _check_grid(series, grid)
    calc = DiscVACalculator(collateral_rate=collateral_rate, unsecured_rate=unsecured_rate)
    return calc.calculate(series)


def cva(
    series: ExposureSeries,
    hazard_rate: float,
    lgd: float,
    collateral_rate: float,
    grid: TimeGrid | None = None,
) -> float:
    """
    Credit valuation adjustment of ``series`` (trapezoidal rule).

    Parameters
    ----------
    series : ExposureSeries
        Pathwise MTM series of a deal or a netted portfolio
    hazard_rate : float
        Constant hazard rate λ
    lgd : float
        Loss given default
    collateral_rate : float
        Discounting rate r_c
    grid : TimeGrid | None
        Integration grid; must match the series grid when given

    Returns
    -------
    float
        CVA value
    """
    _check_grid(series, grid)
    calc = CVACalculator(lgd=lgd, hazard_rate=hazard_rate, collateral_rate=collateral_rate)
    return calc.calculate(series)
