"""
Pydantic configuration models for the pathwise xVA engine.

These models provide validation and type-safe configuration for:
- Simulation parameters (time grid, Monte Carlo settings)
- Market data (spot, flat rates, volatility)
- Forward deal specifications
- Credit parameters

Every field also accepts its camelCase option name (``deltaT``,
``numberOfPaths``, ``collateralRate``, ...), so configuration files may use
either spelling.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pathwise_xva.stochastic.time_grid import TIME_TOLERANCE, TimeGrid


class _ConfigModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SimulationConfig(_ConfigModel):
    """
    Monte Carlo simulation parameters.

    Attributes
    ----------
    delta_t : float
        Uniform grid step in years
    number_of_time_steps : int
        Grid length N (number of time points, t_0 = 0 included)
    number_of_paths : int
        Monte Carlo sample count M
    seed : int | None
        Random seed for reproducibility
    antithetic : bool
        Pair every draw with its negation

    Example
    -------
    >>> config = SimulationConfig(deltaT=0.001, numberOfTimeSteps=1000, numberOfPaths=10000)
    >>> config.time_grid.horizon
    0.999
    """

    delta_t: float = Field(gt=0, le=1.0, default=0.001, alias="deltaT")
    number_of_time_steps: int = Field(ge=2, default=1000, alias="numberOfTimeSteps")
    number_of_paths: int = Field(ge=1, default=10_000, alias="numberOfPaths")
    seed: int | None = Field(default=3141)
    antithetic: bool = False

    @model_validator(mode="after")
    def even_paths_for_antithetic(self) -> "SimulationConfig":
        """Antithetic pairs need an even path count."""
        if self.antithetic and self.number_of_paths % 2 != 0:
            raise ValueError(
                f"Antithetic sampling needs an even number of paths, "
                f"got {self.number_of_paths}"
            )
        return self

    @property
    def time_grid(self) -> TimeGrid:
        """Uniform grid t_i = i * delta_t, i = 0..N-1."""
        return TimeGrid.uniform(0.0, self.number_of_time_steps, self.delta_t)

    @property
    def horizon(self) -> float:
        """Last grid time t_{N-1}."""
        return (self.number_of_time_steps - 1) * self.delta_t


class MarketConfig(_ConfigModel):
    """
    Market configuration with flat continuously compounded rates.

    Attributes
    ----------
    initial_value : float
        Spot value S_0 of the underlying
    collateral_rate : float
        Collateral (risk-free) rate r_c; also the drift of the asset
    unsecured_rate : float
        Unsecured funding rate r_u
    volatility : float
        Black-Scholes volatility σ
    """

    initial_value: float = Field(gt=0, default=100.0, alias="initialValue")
    collateral_rate: float = Field(ge=-0.05, le=0.30, default=0.01, alias="collateralRate")
    unsecured_rate: float = Field(ge=-0.05, le=0.30, default=0.05, alias="unsecuredRate")
    volatility: float = Field(ge=0, le=2.0, default=0.25)

    @property
    def funding_spread(self) -> float:
        """Spread r_c - r_u applied by DiscVA."""
        return self.collateral_rate - self.unsecured_rate


class ForwardConfig(_ConfigModel):
    """
    Equity forward configuration.

    Attributes
    ----------
    strike : float
        Delivery price K
    maturity : float | None
        Delivery time T in years; None means the last grid time
    quantity : float
        Number of units q
    sign : int
        +1 for a long forward, -1 for a short forward
    """

    strike: float = Field(ge=0)
    maturity: float | None = Field(default=None, ge=0)
    quantity: float = Field(gt=0, default=1000.0)
    sign: int = Field(default=1)

    @model_validator(mode="after")
    def sign_is_unit(self) -> "ForwardConfig":
        """Validate the direction flag."""
        if self.sign not in (1, -1):
            raise ValueError(f"Sign must be +1 or -1, got {self.sign}")
        return self

    def resolved(self, horizon: float) -> "ForwardConfig":
        """Copy with a missing maturity replaced by ``horizon``."""
        if self.maturity is not None:
            return self
        return self.model_copy(update={"maturity": horizon})


class CreditConfig(_ConfigModel):
    """
    Counterparty credit parameters for CVA.

    Attributes
    ----------
    hazard_rate : float
        Constant hazard rate λ (per annum)
    lgd : float
        Loss given default (0-1)
    """

    hazard_rate: float = Field(ge=0, le=1.0, default=0.04, alias="hazardRate")
    lgd: float = Field(ge=0, le=1, default=0.60, alias="LGD")


def _check_on_grid(forward: ForwardConfig, simulation: SimulationConfig) -> ForwardConfig:
    """Resolve the maturity and check that it lies on the simulation grid."""
    forward = forward.resolved(simulation.horizon)
    if forward.maturity > simulation.horizon + TIME_TOLERANCE:
        raise ValueError(
            f"Forward maturity {forward.maturity} lies beyond the simulation "
            f"horizon {simulation.horizon}"
        )
    return forward


class DiscVAConfig(_ConfigModel):
    """
    Configuration of the DiscVA analysis.

    Attributes
    ----------
    simulation : SimulationConfig
        Grid and Monte Carlo settings
    market : MarketConfig
        Spot, rates and volatility
    forward : ForwardConfig
        The uncollateralised forward
    """

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)
    forward: ForwardConfig

    @model_validator(mode="after")
    def maturity_on_grid(self) -> "DiscVAConfig":
        """Resolve the forward maturity against the grid."""
        self.forward = _check_on_grid(self.forward, self.simulation)
        return self


class NonLinearityConfig(_ConfigModel):
    """
    Configuration of the CVA non-linearity analysis.

    Attributes
    ----------
    simulation : SimulationConfig
        Grid and Monte Carlo settings
    market : MarketConfig
        Spot, rates and volatility
    forwards : list[ForwardConfig]
        Forwards of the netting set (at least one)
    credit : CreditConfig
        Counterparty default model
    """

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)
    forwards: list[ForwardConfig] = Field(min_length=1)
    credit: CreditConfig = Field(default_factory=CreditConfig)

    @model_validator(mode="after")
    def maturities_on_grid(self) -> "NonLinearityConfig":
        """Resolve the forward maturities against the grid."""
        self.forwards = [_check_on_grid(fwd, self.simulation) for fwd in self.forwards]
        return self
