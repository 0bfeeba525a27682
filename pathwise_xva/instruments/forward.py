"""
Equity forward instrument implementation.

A forward is an agreement to exchange the underlying asset at maturity T
against a fixed strike K.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from pathwise_xva._types import Year
from pathwise_xva.errors import InvalidParameter
from pathwise_xva.instruments.base import Instrument, InstrumentType
from pathwise_xva.market.black_scholes import AssetPaths
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.stochastic.random_variable import RandomVariable

# Tolerance when comparing valuation time against maturity
_MATURITY_TOLERANCE = 1e-12


@dataclass
class EquityForward(Instrument):
    """
    Forward contract on a single asset.

    Pathwise value at time t <= T:
        V(t) = q × sign × (S(t) × D(t,T) - K × D(t,T))

    where:
        q = quantity
        sign = +1 for a long forward, -1 for a short forward
        D(t,T) = exp(-r (T - t)) discounts at the collateral rate
        K = strike

    Attributes
    ----------
    strike : float
        Delivery price K
    maturity : float
        Delivery time T in years
    quantity : float
        Number of units q
    sign : int
        +1 (long) or -1 (short)

    Example
    -------
    >>> fwd = EquityForward(strike=80, maturity=0.999, quantity=1000)
    >>> fwd.analytic_value(100.0, DiscountCurve(rate=0.01))
    20795.22...
    """

    strike: float
    maturity: float
    quantity: float = 1.0
    sign: int = 1
    instrument_type: InstrumentType = field(
        default=InstrumentType.EQUITY_FORWARD, init=False, repr=False
    )

    def __post_init__(self) -> None:
        """Validate forward parameters."""
        if self.sign not in (1, -1):
            raise InvalidParameter(f"Sign must be +1 or -1, got {self.sign}")
        if not self.quantity > 0:
            raise InvalidParameter(f"Quantity must be positive, got {self.quantity}")
        if not self.strike >= 0:
            raise InvalidParameter(f"Strike must be non-negative, got {self.strike}")
        if not self.maturity >= 0:
            raise InvalidParameter(f"Maturity must be non-negative, got {self.maturity}")

    @property
    def is_long(self) -> bool:
        """True for a long forward."""
        return self.sign == 1

    def is_expired(self, t: Year) -> bool:
        """True if t lies after maturity (up to rounding of the grid)."""
        return t > self.maturity + _MATURITY_TOLERANCE

    def calculate_mtm(
        self,
        t: Year,
        underlying: RandomVariable,
        curve: DiscountCurve,
    ) -> RandomVariable:
        """
        Calculate forward MTM at time t.

        Parameters
        ----------
        t : float
            Valuation time in years
        underlying : RandomVariable
            Asset realisations S(t)
        curve : DiscountCurve
            Collateral curve for D(t, T)

        Returns
        -------
        RandomVariable
            MTM on every path; zero once the forward has expired
        """
        if self.is_expired(t):
            return RandomVariable.constant(0.0, underlying.n_samples, time=t)

        df = curve.discount_factor(self.maturity, t_start=t)

        return (
            underlying.mult(df).sub(self.strike * df).mult(self.quantity * self.sign)
        )

    def analytic_value(
        self, initial_value: float, curve: DiscountCurve, valuation_time: Year = 0.0
    ) -> float:
        """
        Closed-form value V(t_0) = q × sign × (S(t_0) - K × D(t_0,T)).

        This is the xVA desk (collateralised) price.
        """
        df = curve.discount_factor(self.maturity, t_start=valuation_time)
        return self.quantity * self.sign * (initial_value - self.strike * df)

    def front_office_value(
        self,
        initial_value: float,
        collateral_curve: DiscountCurve,
        funding_curve: DiscountCurve,
        valuation_time: Year = 0.0,
    ) -> float:
        """
        Closed-form value of the uncollateralised forward.

        The asset forward grows at the collateral rate but the payoff is
        discounted at the unsecured rate. With tau = T - t_0:
            V_FO = q × sign × (S(t_0) × exp(-(r_u - r_c) tau) - K × exp(-r_u tau))
        """
        tau = self.maturity - valuation_time
        spread = funding_curve.spread_to(collateral_curve)
        asset_leg = initial_value * np.exp(-spread * tau)
        strike_leg = self.strike * funding_curve.discount_factor(
            self.maturity, t_start=valuation_time
        )
        return float(self.quantity * self.sign * (asset_leg - strike_leg))

    def monte_carlo_value(self, paths: AssetPaths, curve: DiscountCurve) -> float:
        """
        Monte Carlo value q × sign × D(t_0,T) × (E[S(T)] - K).

        t_0 is the first time of the simulation grid. Passing the unsecured
        curve gives the front-office Monte Carlo price.
        """
        terminal = paths.asset_value_at(self.maturity)
        df = curve.discount_factor(
            self.maturity, t_start=paths.time_grid.initial_time
        )
        return self.quantity * self.sign * df * (terminal.mean() - self.strike)

    def payoff(self, terminal: RandomVariable) -> RandomVariable:
        """Settlement amount q × sign × (S(T) - K) on every path."""
        return terminal.sub(self.strike).mult(self.quantity * self.sign)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": "EQUITY_FORWARD",
            "strike": self.strike,
            "maturity": self.maturity,
            "quantity": self.quantity,
            "sign": self.sign,
        }

    @classmethod
    def from_config(cls, config: "ForwardConfig") -> "EquityForward":  # noqa: F821
        """
        Create forward from configuration.

        Parameters
        ----------
        config : ForwardConfig
            Forward configuration; ``maturity`` must already be resolved

        Returns
        -------
        EquityForward
            Configured forward instance
        """
        if config.maturity is None:
            raise InvalidParameter("Forward maturity must be resolved before pricing")

        return cls(
            strike=config.strike,
            maturity=config.maturity,
            quantity=config.quantity,
            sign=config.sign,
        )

    def __repr__(self) -> str:
        """String representation."""
        direction = "Long" if self.is_long else "Short"
        return (
            f"EquityForward({direction} {self.quantity:,.0f} "
            f"@ {self.strike:.4f}, T={self.maturity:.3f}Y)"
        )
