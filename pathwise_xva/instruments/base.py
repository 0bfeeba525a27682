"""
Base classes for financial instruments.

Provides the abstract interface that all instruments must implement
for pathwise exposure calculation.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pathwise_xva._types import Year
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.stochastic.random_variable import RandomVariable


class InstrumentType(Enum):
    """Enumeration of supported instrument types."""

    EQUITY_FORWARD = "equity_forward"


class Instrument(ABC):
    """
    Abstract base class for all financial instruments.

    All instruments must implement ``calculate_mtm`` to compute
    mark-to-market values from the simulated underlying at one time.

    Attributes
    ----------
    quantity : float
        Number of units of the underlying
    maturity : float
        Time to maturity in years
    instrument_type : InstrumentType
        Type of instrument for classification
    """

    quantity: float
    maturity: float
    instrument_type: InstrumentType

    @abstractmethod
    def calculate_mtm(
        self,
        t: Year,
        underlying: RandomVariable,
        curve: DiscountCurve,
    ) -> RandomVariable:
        """
        Calculate mark-to-market value at time t on every path.

        Parameters
        ----------
        t : float
            Valuation time in years
        underlying : RandomVariable
            Asset realisations at time t
        curve : DiscountCurve
            Curve used to discount from maturity back to t

        Returns
        -------
        RandomVariable
            MTM realisations, same sample count as ``underlying``
        """

    @abstractmethod
    def analytic_value(
        self, initial_value: float, curve: DiscountCurve, valuation_time: Year = 0.0
    ) -> float:
        """
        Closed-form present value at the valuation time.

        Parameters
        ----------
        initial_value : float
            Value of the underlying at ``valuation_time``
        curve : DiscountCurve
            Discount curve
        valuation_time : float
            Time the price refers to, in years

        Returns
        -------
        float
            Present value
        """

    def is_expired(self, t: Year) -> bool:
        """True if t lies strictly after maturity."""
        return t > self.maturity

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Convert instrument to dictionary for serialization."""

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"{self.__class__.__name__}("
            f"quantity={self.quantity:,.0f}, "
            f"maturity={self.maturity:.3f}Y)"
        )
