"""
Pathwise xVA Engine - Core Package.

Valuation adjustments for forward portfolios on a Black-Scholes Monte Carlo
simulation: the Discounting Valuation Adjustment (DiscVA) of an
uncollateralised forward, and the non-linearity of CVA across a netting set.

Example
-------
>>> from pathwise_xva import TimeGrid, EquityForward, simulate, exposure_series, cva
>>> grid = TimeGrid.uniform(0.0, 1000, 0.001)
>>> paths = simulate(grid, 10_000, 100.0, 0.01, 0.25, seed=3141)
>>> series = exposure_series(paths, EquityForward(strike=100, maturity=0.999), 0.01)
>>> cva(series, hazard_rate=0.04, lgd=0.6, collateral_rate=0.01)
"""

__version__ = "1.0.0"

# Core types
from pathwise_xva._types import FloatArray, PathArray

# Errors
from pathwise_xva.errors import (
    InvalidGrid,
    InvalidParameter,
    NumericalDomain,
    OutOfGridMaturity,
    ShapeMismatch,
    XVAError,
)

# Stochastic primitives
from pathwise_xva.stochastic import RandomVariable, TimeGrid

# Configuration
from pathwise_xva.config import (
    DiscVAConfig,
    NonLinearityConfig,
    load_config,
    load_discva_config,
    load_nonlinearity_config,
)

# Market models
from pathwise_xva.market import AssetPaths, BlackScholesModel, DiscountCurve, HazardCurve

# Instruments
from pathwise_xva.instruments import EquityForward, Instrument

# Exposure
from pathwise_xva.exposure import (
    ExposureEngine,
    ExposureMetrics,
    ExposureSeries,
    NettingSet,
    calculate_ene,
    calculate_epe,
    calculate_pfe,
)

# xVA calculations
from pathwise_xva.xva import (
    CVACalculator,
    DiscVACalculator,
    NonLinearityResult,
    calculate_non_linearity,
)

# Analyses
from pathwise_xva.analysis import (
    DiscVAReport,
    NonLinearityReport,
    run_discva_analysis,
    run_nonlinearity_analysis,
)

# Functional interface
from pathwise_xva.api import cva, disc_va, ene, epe, exposure_series, pfe, simulate

__all__ = [
    # Version
    "__version__",
    # Types
    "FloatArray",
    "PathArray",
    # Errors
    "XVAError",
    "InvalidGrid",
    "ShapeMismatch",
    "InvalidParameter",
    "OutOfGridMaturity",
    "NumericalDomain",
    # Stochastic
    "TimeGrid",
    "RandomVariable",
    # Config
    "DiscVAConfig",
    "NonLinearityConfig",
    "load_config",
    "load_discva_config",
    "load_nonlinearity_config",
    # Market
    "AssetPaths",
    "BlackScholesModel",
    "DiscountCurve",
    "HazardCurve",
    # Instruments
    "Instrument",
    "EquityForward",
    # Exposure
    "ExposureEngine",
    "ExposureSeries",
    "ExposureMetrics",
    "NettingSet",
    "calculate_epe",
    "calculate_ene",
    "calculate_pfe",
    # xVA
    "CVACalculator",
    "DiscVACalculator",
    "NonLinearityResult",
    "calculate_non_linearity",
    # Analyses
    "DiscVAReport",
    "NonLinearityReport",
    "run_discva_analysis",
    "run_nonlinearity_analysis",
    # Functional interface
    "simulate",
    "exposure_series",
    "epe",
    "ene",
    "pfe",
    "disc_va",
    "cva",
]
