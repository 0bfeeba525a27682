"""
YAML configuration loading utilities.

Provides functions to load and validate configuration from YAML files,
returning properly typed Pydantic model instances, plus factories for the
reference scenarios.
"""

from pathlib import Path
from typing import Any

import yaml

from pathwise_xva.config.models import (
    CreditConfig,
    DiscVAConfig,
    ForwardConfig,
    MarketConfig,
    NonLinearityConfig,
    SimulationConfig,
)


def _load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Parameters
    ----------
    path : Path
        Path to the YAML file

    Returns
    -------
    dict[str, Any]
        Parsed YAML contents (empty for an empty file)

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    yaml.YAMLError
        If the file contains invalid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_discva_config(path: Path | str) -> DiscVAConfig:
    """
    Load the DiscVA analysis configuration from a YAML file.

    Parameters
    ----------
    path : Path | str
        Path to the configuration YAML file

    Returns
    -------
    DiscVAConfig
        Validated configuration

    Example
    -------
    >>> config = load_discva_config("data/discva.yaml")
    >>> print(config.market.unsecured_rate)
    0.05
    """
    data = _load_yaml(Path(path))

    # Handle nested 'discva' key if present
    if "discva" in data:
        data = data["discva"]

    return DiscVAConfig(**data)


def load_nonlinearity_config(path: Path | str) -> NonLinearityConfig:
    """
    Load the CVA non-linearity configuration from a YAML file.

    Parameters
    ----------
    path : Path | str
        Path to the configuration YAML file

    Returns
    -------
    NonLinearityConfig
        Validated configuration

    Example
    -------
    >>> config = load_nonlinearity_config("data/nonlinearity.yaml")
    >>> print(f"Loaded {len(config.forwards)} forwards")
    """
    data = _load_yaml(Path(path))

    # Handle nested 'nonlinearity' key if present
    if "nonlinearity" in data:
        data = data["nonlinearity"]

    return NonLinearityConfig(**data)


def load_config(
    discva_path: Path | str | None = None,
    nonlinearity_path: Path | str | None = None,
) -> dict[str, Any]:
    """
    Load the configuration of both analyses.

    Parameters
    ----------
    discva_path : Path | str | None
        Path to the DiscVA configuration file
    nonlinearity_path : Path | str | None
        Path to the non-linearity configuration file

    Returns
    -------
    dict[str, Any]
        Dictionary containing:
        - 'discva': DiscVAConfig (if discva_path provided)
        - 'nonlinearity': NonLinearityConfig (if nonlinearity_path provided)
    """
    result: dict[str, Any] = {}

    if discva_path is not None:
        result["discva"] = load_discva_config(discva_path)

    if nonlinearity_path is not None:
        result["nonlinearity"] = load_nonlinearity_config(nonlinearity_path)

    return result


def create_default_discva_config() -> DiscVAConfig:
    """
    Reference DiscVA scenario.

    A long forward of 1000 units struck at 80 maturing at the grid horizon
    (T = 0.999), on a 1000-point grid with Δt = 0.001 and 10000 paths.

    Returns
    -------
    DiscVAConfig
        Default configuration
    """
    return DiscVAConfig(
        simulation=SimulationConfig(
            delta_t=0.001,
            number_of_time_steps=1000,
            number_of_paths=10_000,
            seed=3141,
        ),
        market=MarketConfig(
            initial_value=100.0,
            collateral_rate=0.01,
            unsecured_rate=0.05,
            volatility=0.25,
        ),
        forward=ForwardConfig(strike=80.0, quantity=1000.0, sign=1),
    )


def create_default_nonlinearity_config() -> NonLinearityConfig:
    """
    Reference CVA non-linearity scenario.

    A long forward struck at 100 against a short forward struck at 90,
    1000 units each, with λ = 4% and LGD = 60%.

    Returns
    -------
    NonLinearityConfig
        Default configuration
    """
    return NonLinearityConfig(
        simulation=SimulationConfig(
            delta_t=0.001,
            number_of_time_steps=1000,
            number_of_paths=10_000,
            seed=3141,
        ),
        market=MarketConfig(
            initial_value=100.0,
            collateral_rate=0.01,
            unsecured_rate=0.05,
            volatility=0.25,
        ),
        forwards=[
            ForwardConfig(strike=100.0, quantity=1000.0, sign=1),
            ForwardConfig(strike=90.0, quantity=1000.0, sign=-1),
        ],
        credit=CreditConfig(hazard_rate=0.04, lgd=0.6),
    )
