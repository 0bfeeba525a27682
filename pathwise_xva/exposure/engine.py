"""
Pathwise exposure engine.

Revalues an instrument on every simulated path at every grid time,
producing a time-indexed series of random variables.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from pathwise_xva._types import FloatArray, PathArray
from pathwise_xva.errors import OutOfGridMaturity, ShapeMismatch
from pathwise_xva.instruments.base import Instrument
from pathwise_xva.market.black_scholes import AssetPaths
from pathwise_xva.market.curve import DiscountCurve
from pathwise_xva.stochastic.random_variable import RandomVariable
from pathwise_xva.stochastic.time_grid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ExposureSeries:
    """
    Mark-to-market random variables E[0..N-1] on a time grid.

    Attributes
    ----------
    time_grid : TimeGrid
        Grid the series lives on
    values : tuple[RandomVariable, ...]
        One random variable per grid time

    Example
    -------
    >>> series = ExposureEngine(collateral_rate=0.01).calculate(paths, forward)
    >>> series[0].mean()  # analytic anchor
    >>> ptf = series + other_series  # pathwise netting
    """

    time_grid: TimeGrid
    values: tuple[RandomVariable, ...]

    def __post_init__(self) -> None:
        """Validate length and sample counts."""
        values = tuple(self.values)
        if len(values) != len(self.time_grid):
            raise ShapeMismatch(
                f"Series has {len(values)} entries for a grid of {len(self.time_grid)}"
            )
        counts = {rv.n_samples for rv in values}
        if len(counts) > 1:
            raise ShapeMismatch(f"Series mixes sample counts {sorted(counts)}")
        object.__setattr__(self, "values", values)

    @property
    def n_samples(self) -> int:
        """Sample count M shared by all entries."""
        return self.values[0].n_samples

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> RandomVariable:
        return self.values[index]

    def __iter__(self) -> Iterator[RandomVariable]:
        return iter(self.values)

    def _check_compatible(self, other: "ExposureSeries") -> None:
        if len(other) != len(self) or not np.array_equal(
            other.time_grid.times, self.time_grid.times
        ):
            raise ShapeMismatch("Exposure series live on different time grids")
        if other.n_samples != self.n_samples:
            raise ShapeMismatch(
                f"Cannot combine series with {self.n_samples} "
                f"and {other.n_samples} samples"
            )

    def __add__(self, other: "ExposureSeries") -> "ExposureSeries":
        """Pathwise sum E1[i] + E2[i] (netting before any clipping)."""
        self._check_compatible(other)
        return ExposureSeries(
            time_grid=self.time_grid,
            values=tuple(a.add(b) for a, b in zip(self.values, other.values)),
        )

    def __neg__(self) -> "ExposureSeries":
        return ExposureSeries(
            time_grid=self.time_grid,
            values=tuple(rv.neg() for rv in self.values),
        )

    def scale(self, factor: float) -> "ExposureSeries":
        """Pointwise multiplication by a scalar."""
        return ExposureSeries(
            time_grid=self.time_grid,
            values=tuple(rv.mult(factor) for rv in self.values),
        )

    def expected_exposure(self) -> FloatArray:
        """Mean MTM at each grid time, shape (N,)."""
        return np.array([rv.mean() for rv in self.values])

    def to_matrix(self) -> PathArray:
        """Stack into a matrix of shape (N, M)."""
        return np.vstack([rv.samples for rv in self.values])

    @classmethod
    def net(cls, series: Sequence["ExposureSeries"]) -> "ExposureSeries":
        """Pathwise sum of several series."""
        if not series:
            raise ShapeMismatch("Cannot sum an empty collection of series")

        total = series[0]
        for item in series[1:]:
            total = total + item
        return total


class ExposureEngine:
    """
    Pathwise mark-to-market engine.

    For every grid time t_i the instrument is revalued on the asset
    realisations S[i]. When ``anchor_initial`` is set, E[0] is replaced by
    the closed-form present value at the first grid time t_0, broadcast to
    all paths. The pathwise formula also discounts the asset leg, so without
    the anchor E[0] would read q × sign × D(t_0,T) × (S(t_0) - K) instead of
    the traded price.

    Attributes
    ----------
    collateral_curve : DiscountCurve
        Curve discounting payoffs back to each grid time
    anchor_initial : bool
        Use the analytic price for E[0] (default True)

    Example
    -------
    >>> engine = ExposureEngine(collateral_rate=0.01)
    >>> series = engine.calculate(paths, EquityForward(strike=80, maturity=0.999))
    """

    def __init__(self, collateral_rate: float = 0.01, anchor_initial: bool = True) -> None:
        """
        Initialize exposure engine.

        Parameters
        ----------
        collateral_rate : float
            Flat collateral (risk-free) rate
        anchor_initial : bool
            Anchor E[0] at the analytic price
        """
        self.collateral_curve = DiscountCurve(rate=collateral_rate)
        self.anchor_initial = anchor_initial

    @property
    def collateral_rate(self) -> float:
        """Flat collateral rate."""
        return self.collateral_curve.rate

    def calculate(self, paths: AssetPaths, instrument: Instrument) -> ExposureSeries:
        """
        Calculate the exposure series of one instrument.

        Parameters
        ----------
        paths : AssetPaths
            Simulated underlying
        instrument : Instrument
            Deal to revalue

        Returns
        -------
        ExposureSeries
            Length-N series of MTM random variables

        Raises
        ------
        OutOfGridMaturity
            If the maturity lies outside [t_0, t_{N-1}]
        """
        grid = paths.time_grid
        if not grid.contains(instrument.maturity):
            raise OutOfGridMaturity(
                f"Maturity {instrument.maturity} outside grid "
                f"[{grid.initial_time}, {grid.horizon}]"
            )

        logger.debug("Revaluing %r on %d grid times", instrument, len(grid))

        values = [
            instrument.calculate_mtm(grid.time(i), paths.asset_value(i), self.collateral_curve)
            for i in range(len(grid))
        ]

        if self.anchor_initial:
            exact = instrument.analytic_value(
                paths.initial_value, self.collateral_curve, grid.time(0)
            )
            values[0] = RandomVariable.constant(exact, paths.n_paths, time=grid.time(0))

        return ExposureSeries(time_grid=grid, values=tuple(values))

    def calculate_many(
        self, paths: AssetPaths, instruments: Sequence[Instrument]
    ) -> list[ExposureSeries]:
        """Standalone exposure series for several instruments on the same paths."""
        return [self.calculate(paths, instrument) for instrument in instruments]
