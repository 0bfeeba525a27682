"""
xVA calculation module.

Provides calculators for the valuation adjustments:
- DiscVA: Discounting Valuation Adjustment
- CVA: Credit Valuation Adjustment, and its non-linearity across a netting set
"""

from pathwise_xva.xva.cva import CVACalculator, calculate_unilateral_cva
from pathwise_xva.xva.discva import DiscVACalculator, calculate_disc_va
from pathwise_xva.xva.result import NonLinearityResult, calculate_non_linearity

__all__ = [
    "CVACalculator",
    "DiscVACalculator",
    "NonLinearityResult",
    "calculate_disc_va",
    "calculate_non_linearity",
    "calculate_unilateral_cva",
]
