"""
Netting set aggregation for portfolio exposure.

Trades in a netting set are settled as one net amount on default, so
their pathwise values are summed before any positive or negative part
is taken.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from pathwise_xva.errors import InvalidParameter
from pathwise_xva.exposure.engine import ExposureEngine, ExposureSeries
from pathwise_xva.instruments.base import Instrument
from pathwise_xva.market.black_scholes import AssetPaths


@dataclass
class NettingSet:
    """
    A netting set containing trades that can be netted.

    Attributes
    ----------
    instruments : list[Instrument]
        Instruments in the netting set
    name : str
        Name/identifier for the netting set

    Example
    -------
    >>> long_fwd = EquityForward(strike=80, maturity=0.999, quantity=1000)
    >>> short_fwd = EquityForward(strike=90, maturity=0.999, quantity=1000, sign=-1)
    >>> netting_set = NettingSet(instruments=[long_fwd, short_fwd], name="CPTY_A")
    >>> ptf = netting_set.calculate_exposure(engine, paths)
    """

    instruments: list[Instrument] = field(default_factory=list)
    name: str = "Default"

    def add_instrument(self, instrument: Instrument) -> None:
        """Add an instrument to the netting set."""
        self.instruments.append(instrument)

    @property
    def n_instruments(self) -> int:
        """Number of instruments in the netting set."""
        return len(self.instruments)

    @property
    def max_maturity(self) -> float:
        """Maximum maturity across all instruments."""
        if not self.instruments:
            return 0.0
        return max(inst.maturity for inst in self.instruments)

    def standalone_exposures(
        self, engine: ExposureEngine, paths: AssetPaths
    ) -> list[ExposureSeries]:
        """
        Exposure series of every instrument on its own.

        Parameters
        ----------
        engine : ExposureEngine
            Pathwise revaluation engine
        paths : AssetPaths
            Simulated underlying shared by all trades

        Returns
        -------
        list[ExposureSeries]
            One series per instrument, in insertion order
        """
        if not self.instruments:
            raise InvalidParameter(f"Netting set {self.name!r} is empty")
        return engine.calculate_many(paths, self.instruments)

    def calculate_exposure(self, engine: ExposureEngine, paths: AssetPaths) -> ExposureSeries:
        """
        Net exposure series: the pathwise sum of the standalone series.

        Parameters
        ----------
        engine : ExposureEngine
            Pathwise revaluation engine
        paths : AssetPaths
            Simulated underlying

        Returns
        -------
        ExposureSeries
            Net MTM on every path and grid time
        """
        return ExposureSeries.net(self.standalone_exposures(engine, paths))

    def net_to_gross_ratio(
        self, engine: ExposureEngine, paths: AssetPaths, time_index: int
    ) -> float:
        """
        Average net-to-gross ratio at one grid time.

        NGR = E[max(net, 0)] / E[Σ max(V_k, 0)]

        NGR = 1 means no netting benefit, NGR < 1 means exposure is
        reduced by netting.

        Parameters
        ----------
        engine : ExposureEngine
            Pathwise revaluation engine
        paths : AssetPaths
            Simulated underlying
        time_index : int
            Grid index

        Returns
        -------
        float
            Net-to-gross ratio
        """
        standalone = self.standalone_exposures(engine, paths)

        net = ExposureSeries.net(standalone)[time_index]
        gross = sum(series[time_index].floor(0.0).mean() for series in standalone)

        if gross < 1e-10:
            return 1.0

        return net.floor(0.0).mean() / gross

    @classmethod
    def from_instruments(
        cls,
        instruments: Sequence[Instrument],
        name: str = "Default",
    ) -> "NettingSet":
        """Create netting set from a sequence of instruments."""
        return cls(instruments=list(instruments), name=name)

    def __repr__(self) -> str:
        """String representation."""
        return f"NettingSet(name={self.name!r}, n_instruments={self.n_instruments})"
