"""
Black-Scholes (geometric Brownian motion) Monte Carlo model.

The asset follows log-normal dynamics under the risk-neutral measure
with drift equal to the collateral rate and constant volatility.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from pathwise_xva._types import PathArray, Year
from pathwise_xva.errors import InvalidParameter
from pathwise_xva.stochastic.random_variable import RandomVariable, is_read_only
from pathwise_xva.stochastic.time_grid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AssetPaths:
    """
    Simulated asset realisations S[i, p].

    Attributes
    ----------
    time_grid : TimeGrid
        Simulation time grid (N points)
    values : PathArray
        Read-only matrix of shape (N, M); row i is the time slice t_i
    initial_value : float
        Spot value S_0 shared by all paths

    Example
    -------
    >>> paths = BlackScholesModel(grid, n_paths=10_000, seed=3141).simulate()
    >>> s_T = paths.asset_value_at(0.999)
    >>> print(f"E[S(T)]: {s_T.mean():.2f}")
    """

    time_grid: TimeGrid
    values: PathArray = field(repr=False)
    initial_value: float

    def __post_init__(self) -> None:
        """Validate shape and freeze the matrix."""
        values = np.asarray(self.values, dtype=np.float64)
        if not (is_read_only(values) and values.flags.c_contiguous):
            values = np.array(values, order="C")
        if values.ndim != 2 or values.shape[0] != len(self.time_grid):
            raise InvalidParameter(
                f"Path matrix must have shape (n_steps={len(self.time_grid)}, n_paths), "
                f"got {values.shape}"
            )
        values.flags.writeable = False
        object.__setattr__(self, "values", values)

    @property
    def n_steps(self) -> int:
        """Number of time points N."""
        return int(self.values.shape[0])

    @property
    def n_paths(self) -> int:
        """Number of paths M."""
        return int(self.values.shape[1])

    def asset_value(self, time_index: int) -> RandomVariable:
        """
        Asset realisations at a grid index.

        The returned random variable is a zero-copy view of the path row.
        """
        return RandomVariable(
            self.values[time_index], time=self.time_grid.time(time_index)
        )

    def asset_value_at(self, t: Year) -> RandomVariable:
        """Asset realisations at the grid point nearest at or before t."""
        return self.asset_value(self.time_grid.nearest_index_less_or_equal(t))

    def __iter__(self) -> Iterator[RandomVariable]:
        return (self.asset_value(i) for i in range(self.n_steps))

    def __len__(self) -> int:
        return self.n_steps


@dataclass
class BlackScholesModel:
    """
    Geometric Brownian Motion model for a single asset.

    Under the risk-neutral (collateral) measure:
        dS/S = r dt + σ dW

    Attributes
    ----------
    time_grid : TimeGrid
        Simulation time grid
    n_paths : int
        Number of Monte Carlo paths M
    initial_value : float
        Spot value S_0
    risk_free_rate : float
        Drift r, the collateral rate
    volatility : float
        Constant volatility σ
    seed : int | None
        Random seed; the same seed reproduces the same paths
    antithetic : bool
        If True, the second half of the paths uses the negated draws

    Example
    -------
    >>> grid = TimeGrid.uniform(0.0, 1000, 0.001)
    >>> model = BlackScholesModel(grid, n_paths=10_000, initial_value=100,
    ...                           risk_free_rate=0.01, volatility=0.25)
    >>> paths = model.simulate()
    """

    time_grid: TimeGrid
    n_paths: int = 10_000
    initial_value: float = 100.0
    risk_free_rate: float = 0.01
    volatility: float = 0.25
    seed: int | None = 3141
    antithetic: bool = False

    def __post_init__(self) -> None:
        """Validate model parameters."""
        if self.n_paths < 1:
            raise InvalidParameter(f"n_paths must be positive, got {self.n_paths}")
        if not self.initial_value > 0:
            raise InvalidParameter(
                f"Initial value must be positive, got {self.initial_value}"
            )
        if not self.volatility >= 0:
            raise InvalidParameter(
                f"Volatility must be non-negative, got {self.volatility}"
            )
        if self.antithetic and self.n_paths % 2 != 0:
            raise InvalidParameter(
                f"Antithetic sampling needs an even number of paths, got {self.n_paths}"
            )

    def _draw_increments(self, n_increments: int) -> PathArray:
        """Standard normal draws Z[i, p], shape (n_increments, n_paths)."""
        rng = np.random.default_rng(self.seed)

        if not self.antithetic:
            return rng.standard_normal((n_increments, self.n_paths))

        half = rng.standard_normal((n_increments, self.n_paths // 2))
        return np.concatenate([half, -half], axis=1)

    def simulate(self) -> AssetPaths:
        """
        Simulate asset paths using the exact log-normal step.

        Returns
        -------
        AssetPaths
            Realisations of shape (N, M)

        Notes
        -----
        Log-Euler discretization (exact for constant coefficients):
            S(t_i) = S(t_{i-1}) * exp[(r - 0.5σ²)Δt_i + σ√Δt_i * Z_i]
        """
        n_steps = len(self.time_grid)
        logger.info(
            "Simulating %d paths on %d time points (sigma=%.4f, r=%.4f, seed=%s)",
            self.n_paths,
            n_steps,
            self.volatility,
            self.risk_free_rate,
            self.seed,
        )

        dt = self.time_grid.deltas[:, np.newaxis]

        # Log increments, built in place on the draws to keep one N x M buffer
        increments = self._draw_increments(n_steps - 1)
        increments *= self.volatility * np.sqrt(dt)
        increments += (self.risk_free_rate - 0.5 * self.volatility**2) * dt

        values = np.zeros((n_steps, self.n_paths))
        np.cumsum(increments, axis=0, out=values[1:])
        del increments

        np.exp(values, out=values)
        values *= self.initial_value
        values.flags.writeable = False

        return AssetPaths(
            time_grid=self.time_grid,
            values=values,
            initial_value=self.initial_value,
        )

    def expected_value(self, t: Year) -> float:
        """Analytic first moment E[S(t)] = S_0 exp(r t)."""
        return self.initial_value * float(np.exp(self.risk_free_rate * t))

    @classmethod
    def from_config(
        cls,
        simulation: "SimulationConfig",  # noqa: F821
        market: "MarketConfig",  # noqa: F821
    ) -> "BlackScholesModel":
        """
        Create model from configuration objects.

        Parameters
        ----------
        simulation : SimulationConfig
            Grid, path count and seed
        market : MarketConfig
            Spot, collateral rate and volatility

        Returns
        -------
        BlackScholesModel
            Initialized model
        """
        return cls(
            time_grid=simulation.time_grid,
            n_paths=simulation.number_of_paths,
            initial_value=market.initial_value,
            risk_free_rate=market.collateral_rate,
            volatility=market.volatility,
            seed=simulation.seed,
            antithetic=simulation.antithetic,
        )
