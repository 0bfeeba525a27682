"""
End-to-end analyses.

Each analysis is a straight-through pipeline:
configure → simulate → derive exposures → reduce → integrate.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pathwise_xva.config.loader import (
    create_default_discva_config,
    create_default_nonlinearity_config,
)
from pathwise_xva.config.models import DiscVAConfig, NonLinearityConfig
from pathwise_xva.exposure.engine import ExposureEngine, ExposureSeries
from pathwise_xva.exposure.metrics import ExposureMetrics
from pathwise_xva.exposure.netting import NettingSet
from pathwise_xva.instruments.forward import EquityForward
from pathwise_xva.market.black_scholes import BlackScholesModel
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.xva.cva import CVACalculator
from pathwise_xva.xva.discva import DiscVACalculator
from pathwise_xva.xva.result import NonLinearityResult, calculate_non_linearity

logger = logging.getLogger(__name__)


@dataclass
class DiscVAReport:
    """
    Prices and adjustment of an uncollateralised forward.

    Attributes
    ----------
    forward : EquityForward
        The valued deal
    xva_desk_price : float
        Closed-form price discounted at the collateral rate
    xva_desk_price_mc : float
        Monte Carlo counterpart of ``xva_desk_price``
    front_office_price : float
        Closed-form price discounted at the unsecured rate
    front_office_price_mc : float
        Monte Carlo counterpart of ``front_office_price``
    disc_va : float
        Discounting valuation adjustment
    metrics : ExposureMetrics
        EPE/ENE/PFE profiles of the forward
    """

    forward: EquityForward
    xva_desk_price: float
    xva_desk_price_mc: float
    front_office_price: float
    front_office_price_mc: float
    disc_va: float
    metrics: ExposureMetrics = field(repr=False)

    @property
    def reconstructed_xva_desk_price(self) -> float:
        """V_frontOffice - DiscVA, which approximates the xVA desk price."""
        return self.front_office_price - self.disc_va

    @property
    def reconstruction_error(self) -> float:
        """Relative gap between the reconstructed and the exact xVA desk price."""
        return (self.reconstructed_xva_desk_price - self.xva_desk_price) / abs(
            self.xva_desk_price
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "forward": self.forward.to_dict(),
            "xva_desk_price": self.xva_desk_price,
            "xva_desk_price_mc": self.xva_desk_price_mc,
            "front_office_price": self.front_office_price,
            "front_office_price_mc": self.front_office_price_mc,
            "disc_va": self.disc_va,
            "reconstructed_xva_desk_price": self.reconstructed_xva_desk_price,
            "reconstruction_error": self.reconstruction_error,
            "peak_epe": self.metrics.peak_epe,
            "peak_ene": self.metrics.peak_ene,
        }

    def summary(self) -> str:
        """
        Generate formatted summary string.

        Returns
        -------
        str
            Formatted summary
        """
        lines = [
            "DiscVA Summary",
            "=" * 48,
            f"Deal: {self.forward!r}",
            "",
            f"xVA desk price (exact):     {self.xva_desk_price:>18,.4f}",
            f"xVA desk price (MC):        {self.xva_desk_price_mc:>18,.4f}",
            f"Front office price (exact): {self.front_office_price:>18,.4f}",
            f"Front office price (MC):    {self.front_office_price_mc:>18,.4f}",
            "-" * 48,
            f"DiscVA:                     {self.disc_va:>18,.4f}",
            f"Front office - DiscVA:      {self.reconstructed_xva_desk_price:>18,.4f}",
            f"Relative gap:               {self.reconstruction_error:>18.4%}",
        ]
        return "\n".join(lines)


@dataclass
class NonLinearityReport:
    """
    Standalone and netted CVA of a netting set.

    Attributes
    ----------
    netting_set : NettingSet
        The forwards
    result : NonLinearityResult
        Standalone and portfolio CVAs
    standalone_metrics : list[ExposureMetrics]
        Exposure profiles of each forward
    portfolio_metrics : ExposureMetrics
        Exposure profile of the netted portfolio
    portfolio_cs01 : float
        Portfolio CVA change per 1bp of hazard rate
    """

    netting_set: NettingSet
    result: NonLinearityResult
    standalone_metrics: list[ExposureMetrics] = field(repr=False)
    portfolio_metrics: ExposureMetrics = field(repr=False)
    portfolio_cs01: float = 0.0

    @property
    def non_linearity(self) -> float:
        """Σₖ CVAₖ - CVA_ptf."""
        return self.result.non_linearity

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "forwards": [inst.to_dict() for inst in self.netting_set.instruments],
        }
        data.update(self.result.to_dict())
        data["portfolio_cs01"] = self.portfolio_cs01
        return data

    def summary(self) -> str:
        """Generate formatted summary string."""
        lines = [f"Netting set: {self.netting_set.name}"]
        lines.extend(f"  {inst!r}" for inst in self.netting_set.instruments)
        lines.extend(
            [
                "",
                self.result.summary(),
                f"Portfolio CS01: {self.portfolio_cs01:>18,.4f}",
            ]
        )
        return "\n".join(lines)


def run_discva_analysis(config: DiscVAConfig | None = None) -> DiscVAReport:
    """
    Price an uncollateralised forward and compute its DiscVA.

    Parameters
    ----------
    config : DiscVAConfig | None
        Analysis configuration (default: reference scenario)

    Returns
    -------
    DiscVAReport
        Prices, DiscVA and exposure profiles
    """
    if config is None:
        config = create_default_discva_config()

    market = config.market
    forward = EquityForward.from_config(config.forward)
    collateral_curve = DiscountCurve(rate=market.collateral_rate)
    funding_curve = DiscountCurve(rate=market.unsecured_rate)

    logger.info("Running DiscVA analysis for %r", forward)
    paths = BlackScholesModel.from_config(config.simulation, market).simulate()
    t0 = paths.time_grid.initial_time

    series = ExposureEngine(collateral_rate=market.collateral_rate).calculate(paths, forward)
    disc_va = DiscVACalculator(
        collateral_rate=market.collateral_rate,
        unsecured_rate=market.unsecured_rate,
    ).calculate(series)

    report = DiscVAReport(
        forward=forward,
        xva_desk_price=forward.analytic_value(
            market.initial_value, collateral_curve, t0
        ),
        xva_desk_price_mc=forward.monte_carlo_value(paths, collateral_curve),
        front_office_price=forward.front_office_value(
            market.initial_value, collateral_curve, funding_curve, t0
        ),
        front_office_price_mc=forward.monte_carlo_value(paths, funding_curve),
        disc_va=disc_va,
        metrics=ExposureMetrics.from_series(series),
    )
    logger.info(
        "DiscVA %.4f, xVA desk %.4f, front office %.4f",
        report.disc_va,
        report.xva_desk_price,
        report.front_office_price,
    )
    return report


def run_nonlinearity_analysis(config: NonLinearityConfig | None = None) -> NonLinearityReport:
    """
    Compare standalone CVAs of a netting set with its portfolio CVA.

    Parameters
    ----------
    config : NonLinearityConfig | None
        Analysis configuration (default: reference scenario)

    Returns
    -------
    NonLinearityReport
        CVAs, non-linearity and exposure profiles
    """
    if config is None:
        config = create_default_nonlinearity_config()

    market = config.market
    netting_set = NettingSet.from_instruments(
        [EquityForward.from_config(fwd) for fwd in config.forwards], name="Portfolio"
    )

    logger.info("Running CVA non-linearity analysis for %r", netting_set)
    paths = BlackScholesModel.from_config(config.simulation, market).simulate()

    engine = ExposureEngine(collateral_rate=market.collateral_rate)
    standalone = netting_set.standalone_exposures(engine, paths)
    calculator = CVACalculator(
        lgd=config.credit.lgd,
        hazard_rate=config.credit.hazard_rate,
        collateral_rate=market.collateral_rate,
    )

    result = calculate_non_linearity(calculator, standalone)
    portfolio = ExposureSeries.net(standalone)

    report = NonLinearityReport(
        netting_set=netting_set,
        result=result,
        standalone_metrics=[ExposureMetrics.from_series(series) for series in standalone],
        portfolio_metrics=ExposureMetrics.from_series(portfolio),
        portfolio_cs01=calculator.sensitivity_to_hazard_rate(portfolio),
    )
    logger.info("CVA non-linearity %.4f", report.non_linearity)
    return report
