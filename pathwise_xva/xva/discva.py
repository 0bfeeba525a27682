"""
Discounting Valuation Adjustment (DiscVA) calculation.

DiscVA is the valuation difference between discounting an uncollateralised
deal at the unsecured funding rate (front office) and at the collateral
rate (xVA desk). It is the funding spread integrated against the expected
exposure.
"""

import logging
from dataclasses import dataclass

import numpy as np

from pathwise_xva._types import FloatArray
from pathwise_xva.errors import InvalidGrid, NumericalDomain
from pathwise_xva.exposure.engine import ExposureSeries
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.stochastic.time_grid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass
class DiscVACalculator:
    """
    Calculator for the Discounting Valuation Adjustment.

    DiscVA = s × Σᵢ E[V(tᵢ)] × exp(-r_u tᵢ) × wᵢ

    where:
        s = r_c - r_u (collateral minus unsecured rate)
        wᵢ = left-rectangle step weight (Δt on a uniform grid)

    With this sign convention V_xVAdesk ≈ V_frontOffice - DiscVA.

    Attributes
    ----------
    collateral_rate : float
        Flat collateral rate r_c
    unsecured_rate : float
        Flat unsecured funding rate r_u

    Example
    -------
    >>> calc = DiscVACalculator(collateral_rate=0.01, unsecured_rate=0.05)
    >>> disc_va = calc.calculate(series)
    >>> print(f"DiscVA: {disc_va:,.2f}")
    """

    collateral_rate: float = 0.01
    unsecured_rate: float = 0.05

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not (np.isfinite(self.collateral_rate) and np.isfinite(self.unsecured_rate)):
            raise NumericalDomain(
                f"Rates must be finite, got r_c={self.collateral_rate}, "
                f"r_u={self.unsecured_rate}"
            )

    @property
    def spread(self) -> float:
        """Funding spread s = r_c - r_u."""
        return self.collateral_rate - self.unsecured_rate

    @property
    def funding_curve(self) -> DiscountCurve:
        """Unsecured funding curve."""
        return DiscountCurve(rate=self.unsecured_rate)

    def calculate_from_profile(
        self, expected_exposure: FloatArray, time_grid: TimeGrid
    ) -> float:
        """
        Calculate DiscVA from an expected exposure curve.

        Parameters
        ----------
        expected_exposure : FloatArray
            Mean MTM at each grid time, shape (N,)
        time_grid : TimeGrid
            Grid of the profile (at least two points)

        Returns
        -------
        float
            DiscVA value
        """
        expected_exposure = np.asarray(expected_exposure, dtype=np.float64)
        if expected_exposure.shape != (len(time_grid),):
            raise InvalidGrid(
                f"Profile of length {expected_exposure.size} does not match "
                f"grid of {len(time_grid)} points"
            )

        weights = time_grid.step_weights()
        discount_factors = self.funding_curve.discount_factor(time_grid.times)

        return float(self.spread * np.sum(expected_exposure * discount_factors * weights))

    def calculate(self, series: ExposureSeries) -> float:
        """
        Calculate DiscVA from a pathwise exposure series.

        Parameters
        ----------
        series : ExposureSeries
            MTM random variables of the deal on its simulation grid

        Returns
        -------
        float
            DiscVA value
        """
        disc_va = self.calculate_from_profile(series.expected_exposure(), series.time_grid)
        logger.debug("DiscVA with spread %.4f: %.6f", self.spread, disc_va)
        return disc_va


def calculate_disc_va(
    series: ExposureSeries,
    collateral_rate: float = 0.01,
    unsecured_rate: float = 0.05,
) -> float:
    """
    Convenience function for DiscVA calculation.

    Parameters
    ----------
    series : ExposureSeries
        Pathwise exposure series
    collateral_rate : float
        Collateral rate r_c
    unsecured_rate : float
        Unsecured funding rate r_u

    Returns
    -------
    float
        DiscVA value
    """
    calc = DiscVACalculator(collateral_rate=collateral_rate, unsecured_rate=unsecured_rate)
    return calc.calculate(series)
