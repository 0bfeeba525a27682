"""
Configuration module for the pathwise xVA engine.

Provides Pydantic-validated configuration models and YAML loading utilities
for simulation parameters, market data, forwards and credit parameters.
"""

from pathwise_xva.config.loader import (
    create_default_discva_config,
    create_default_nonlinearity_config,
    load_config,
    load_discva_config,
    load_nonlinearity_config,
)
from pathwise_xva.config.models import (
    CreditConfig,
    DiscVAConfig,
    ForwardConfig,
    MarketConfig,
    NonLinearityConfig,
    SimulationConfig,
)

__all__ = [
    # Models
    "SimulationConfig",
    "MarketConfig",
    "ForwardConfig",
    "CreditConfig",
    "DiscVAConfig",
    "NonLinearityConfig",
    # Loaders
    "load_config",
    "load_discva_config",
    "load_nonlinearity_config",
    "create_default_discva_config",
    "create_default_nonlinearity_config",
]
