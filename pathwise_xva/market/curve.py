"""
Flat discount curve for collateral and unsecured discounting.

Rates are continuously compounded and constant in time; there is no
term-structure modelling beyond a single flat rate.
"""

from dataclasses import dataclass

import numpy as np

from pathwise_xva._types import FloatArray, Rate, Year
from pathwise_xva.errors import NumericalDomain


@dataclass(frozen=True)
class DiscountCurve:
    """
    Discount curve with a flat continuously compounded rate.

    Attributes
    ----------
    rate : float
        Flat rate (e.g. 0.01 for the collateral rate, 0.05 for unsecured funding)

    Example
    -------
    >>> collateral = DiscountCurve(rate=0.01)
    >>> df = collateral.discount_factor(0.999)
    >>> print(f"DF(0, T): {df:.6f}")
    DF(0, T): 0.990060
    """

    rate: Rate = 0.01

    def __post_init__(self) -> None:
        """Validate curve inputs."""
        if not np.isfinite(self.rate):
            raise NumericalDomain(f"Rate must be finite, got {self.rate}")

    def discount_factor(
        self, t: Year | FloatArray, t_start: Year | FloatArray = 0.0
    ) -> float | FloatArray:
        """
        Calculate discount factor from t_start to t.

        Parameters
        ----------
        t : float | FloatArray
            End time(s) in years
        t_start : float | FloatArray
            Start time(s) in years (default 0)

        Returns
        -------
        float | FloatArray
            Discount factor(s) D(t_start, t) = exp(-r * (t - t_start))

        Notes
        -----
        No flooring is applied: for t < t_start the factor compounds forward.
        """
        tau = np.asarray(t, dtype=np.float64) - np.asarray(t_start, dtype=np.float64)
        df = np.exp(-self.rate * tau)
        if df.ndim == 0:
            return float(df)
        return df  # type: ignore[return-value]

    def spread_to(self, other: "DiscountCurve") -> float:
        """Rate spread r_self - r_other."""
        return self.rate - other.rate
