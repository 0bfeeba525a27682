"""
CVA non-linearity result container and combined calculation.

CVA is not additive across trades: the claim max(-V, 0) is convex, so the
sum of standalone CVAs dominates the CVA of the netted portfolio.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pathwise_xva.errors import ShapeMismatch
from pathwise_xva.exposure.engine import ExposureSeries
from pathwise_xva.xva.cva import CVACalculator

logger = logging.getLogger(__name__)


@dataclass
class NonLinearityResult:
    """
    Standalone and portfolio CVA of a netting set.

    Attributes
    ----------
    standalone_cva : tuple[float, ...]
        CVA of each deal on its own
    portfolio_cva : float
        CVA of the pathwise sum of the deals

    Example
    -------
    >>> result = calculate_non_linearity(calc, [series_long, series_short])
    >>> print(f"Non-linearity: {result.non_linearity:,.2f}")
    >>> print(result.to_dict())
    """

    standalone_cva: tuple[float, ...]
    portfolio_cva: float

    @property
    def sum_of_standalone(self) -> float:
        """Σₖ CVAₖ."""
        return float(sum(self.standalone_cva))

    @property
    def non_linearity(self) -> float:
        """
        Netting benefit Σₖ CVAₖ - CVA_ptf.

        Non-negative on every simulation, since the claim is subadditive
        path by path.
        """
        return self.sum_of_standalone - self.portfolio_cva

    @property
    def netting_ratio(self) -> float:
        """CVA_ptf / Σₖ CVAₖ (1.0 when there is nothing to net)."""
        total = self.sum_of_standalone
        if total <= 0:
            return 1.0
        return self.portfolio_cva / total

    def to_dict(self) -> dict[str, float]:
        """
        Convert to dictionary.

        Returns
        -------
        dict[str, float]
            Standalone CVAs keyed ``cva_1``, ``cva_2``, ... and the totals
        """
        result = {f"cva_{k}": cva for k, cva in enumerate(self.standalone_cva, start=1)}
        result.update(
            {
                "sum_of_standalone": self.sum_of_standalone,
                "portfolio_cva": self.portfolio_cva,
                "non_linearity": self.non_linearity,
            }
        )
        return result

    def summary(self) -> str:
        """
        Generate formatted summary string.

        Returns
        -------
        str
            Formatted summary
        """
        lines = ["CVA Non-Linearity", "=" * 40]
        for k, cva in enumerate(self.standalone_cva, start=1):
            lines.append(f"CVA deal {k}:     {cva:>18,.4f}")
        lines.extend(
            [
                "-" * 40,
                f"Sum standalone: {self.sum_of_standalone:>18,.4f}",
                f"Portfolio CVA:  {self.portfolio_cva:>18,.4f}",
                f"Non-linearity:  {self.non_linearity:>18,.4f}",
            ]
        )
        return "\n".join(lines)


def calculate_non_linearity(
    calculator: CVACalculator,
    standalone_series: Sequence[ExposureSeries],
) -> NonLinearityResult:
    """
    Compare standalone CVAs against the CVA of the netted portfolio.

    Parameters
    ----------
    calculator : CVACalculator
        CVA calculator shared by all deals
    standalone_series : Sequence[ExposureSeries]
        Exposure series of each deal on the same paths

    Returns
    -------
    NonLinearityResult
        Standalone and portfolio CVAs
    """
    if not standalone_series:
        raise ShapeMismatch("Non-linearity needs at least one exposure series")

    standalone_cva = tuple(calculator.calculate(series) for series in standalone_series)
    portfolio_cva = calculator.calculate(ExposureSeries.net(standalone_series))

    result = NonLinearityResult(standalone_cva=standalone_cva, portfolio_cva=portfolio_cva)
    logger.info(
        "Portfolio CVA %.4f vs sum of %d standalone CVAs %.4f",
        result.portfolio_cva,
        len(standalone_cva),
        result.sum_of_standalone,
    )
    return result
