"""
Financial instruments module for pathwise exposure calculation.

Each instrument computes its mark-to-market value from the simulated
underlying at any grid time, enabling exposure calculation.
"""

from pathwise_xva.instruments.base import Instrument, InstrumentType
from pathwise_xva.instruments.forward import EquityForward

__all__ = [
    "Instrument",
    "InstrumentType",
    "EquityForward",
]
