"""
Exposure calculation module for xVA.

Provides the pathwise revaluation engine, netting set aggregation,
and exposure metrics (EPE, ENE, PFE).
"""

from pathwise_xva.exposure.engine import ExposureEngine, ExposureSeries
from pathwise_xva.exposure.metrics import (
    ExposureMetrics,
    ExposureProfile,
    calculate_ene,
    calculate_epe,
    calculate_pfe,
    expected_negative_exposure,
    expected_positive_exposure,
    potential_future_exposure,
)
from pathwise_xva.exposure.netting import NettingSet

__all__ = [
    "ExposureEngine",
    "ExposureSeries",
    "NettingSet",
    "ExposureMetrics",
    "ExposureProfile",
    "expected_positive_exposure",
    "expected_negative_exposure",
    "potential_future_exposure",
    "calculate_epe",
    "calculate_ene",
    "calculate_pfe",
]
