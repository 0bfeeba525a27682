"""
Hazard rate curve for counterparty default modelling.

Provides survival probability and default probability calculations
used in CVA computations.
"""

from dataclasses import dataclass

import numpy as np

from pathwise_xva._types import FloatArray, Year
from pathwise_xva.errors import InvalidParameter


@dataclass(frozen=True)
class HazardCurve:
    """
    Constant-intensity (Poisson) default model.

    Survival probability is Q(t) = exp(-λ * t).

    Attributes
    ----------
    hazard_rate : float
        Constant hazard rate λ (per annum)

    Example
    -------
    >>> curve = HazardCurve(hazard_rate=0.04)
    >>> surv_prob = curve.survival_probability(1.0)
    >>> print(f"1Y survival: {surv_prob:.2%}")
    1Y survival: 96.08%
    """

    hazard_rate: float = 0.04

    def __post_init__(self) -> None:
        """Validate inputs."""
        if not self.hazard_rate >= 0:
            raise InvalidParameter(
                f"Hazard rate must be non-negative, got {self.hazard_rate}"
            )

    def survival_probability(self, t: Year | FloatArray) -> float | FloatArray:
        """
        Calculate survival probability to time t.

        Parameters
        ----------
        t : float | FloatArray
            Time(s) in years

        Returns
        -------
        float | FloatArray
            Survival probability Q(t) = exp(-λ * t)
        """
        q = np.exp(-self.hazard_rate * np.asarray(t, dtype=np.float64))
        if q.ndim == 0:
            return float(q)
        return q  # type: ignore[return-value]

    def default_probability(self, t1: Year, t2: Year | None = None) -> float:
        """
        Calculate probability of default in (t1, t2].

        If t2 is None, calculates probability of default in (0, t1].

        Returns
        -------
        float
            PD(t1, t2) = Q(t1) - Q(t2)
        """
        if t2 is None:
            return float(1.0 - self.survival_probability(t1))

        return float(self.survival_probability(t1) - self.survival_probability(t2))

    def incremental_default_probabilities(self, time_grid: FloatArray) -> FloatArray:
        """
        Calculate marginal default probabilities for each grid interval.

        Parameters
        ----------
        time_grid : FloatArray
            Array of time points in years

        Returns
        -------
        FloatArray
            Array of shape (len(time_grid),). Element 0 is PD(0, t_0),
            element i >= 1 is Q(t_{i-1}) - Q(t_i).
        """
        survival_probs = np.atleast_1d(self.survival_probability(time_grid))

        inc_pd = np.empty_like(survival_probs)
        inc_pd[0] = 1.0 - survival_probs[0]
        inc_pd[1:] = survival_probs[:-1] - survival_probs[1:]

        return inc_pd

    def bumped(self, bump: float) -> "HazardCurve":
        """Return a curve with the hazard rate shifted by ``bump``."""
        return HazardCurve(hazard_rate=self.hazard_rate + bump)
