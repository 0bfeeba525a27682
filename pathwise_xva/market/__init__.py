"""
Market models for the pathwise xVA engine.

This module provides:
- Flat discount curves (collateral and unsecured funding)
- Hazard rate curve for counterparty default
- Black-Scholes (GBM) Monte Carlo model for the underlying asset
"""

from pathwise_xva.market.black_scholes import AssetPaths, BlackScholesModel
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.market.hazard import HazardCurve

__all__ = [
    "AssetPaths",
    "BlackScholesModel",
    "DiscountCurve",
    "HazardCurve",
]
