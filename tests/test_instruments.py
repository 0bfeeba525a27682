"""
Tests for the equity forward.
"""

import numpy as np
import pytest

from pathwise_xva.config import ForwardConfig
from pathwise_xva.errors import InvalidParameter
from pathwise_xva.instruments import EquityForward, InstrumentType
from pathwise_xva.market import BlackScholesModel, DiscountCurve
from pathwise_xva.stochastic import RandomVariable, TimeGrid


class TestEquityForward:
    """Tests for forward pricing and revaluation."""

    def test_analytic_value(self, collateral_curve: DiscountCurve) -> None:
        """V(0) = q (S_0 - K exp(-r T))."""
        fwd = EquityForward(strike=80.0, maturity=0.999, quantity=1000.0)
        expected = 1000.0 * (100.0 - 80.0 * np.exp(-0.01 * 0.999))
        assert fwd.analytic_value(100.0, collateral_curve) == pytest.approx(expected)
        assert fwd.analytic_value(100.0, collateral_curve) == pytest.approx(20795.22, abs=0.01)

    def test_short_is_negated(self, collateral_curve: DiscountCurve) -> None:
        """A short forward is the negative of the long."""
        long_fwd = EquityForward(strike=90.0, maturity=0.5, quantity=10.0)
        short_fwd = EquityForward(strike=90.0, maturity=0.5, quantity=10.0, sign=-1)
        assert short_fwd.analytic_value(100.0, collateral_curve) == pytest.approx(
            -long_fwd.analytic_value(100.0, collateral_curve)
        )
        assert not short_fwd.is_long

    def test_mtm_formula(self, collateral_curve: DiscountCurve) -> None:
        """Pathwise MTM is q sign (S D(t,T) - K D(t,T))."""
        fwd = EquityForward(strike=80.0, maturity=1.0, quantity=2.0, sign=-1)
        underlying = RandomVariable(np.array([70.0, 80.0, 95.0]), time=0.25)
        df = np.exp(-0.01 * 0.75)

        mtm = fwd.calculate_mtm(0.25, underlying, collateral_curve)

        assert np.allclose(mtm.samples, -2.0 * (underlying.samples * df - 80.0 * df))
        assert mtm.time == 0.25

    def test_mtm_at_maturity(self, collateral_curve: DiscountCurve) -> None:
        """At maturity the MTM is the settlement amount."""
        fwd = EquityForward(strike=80.0, maturity=0.5, quantity=3.0)
        underlying = RandomVariable(np.array([70.0, 90.0]), time=0.5)
        mtm = fwd.calculate_mtm(0.5, underlying, collateral_curve)
        assert np.allclose(mtm.samples, fwd.payoff(underlying).samples)
        assert np.allclose(mtm.samples, [-30.0, 30.0])

    def test_mtm_after_maturity(self, collateral_curve: DiscountCurve) -> None:
        """An expired forward has zero value on every path."""
        fwd = EquityForward(strike=80.0, maturity=0.5)
        underlying = RandomVariable(np.array([70.0, 90.0]), time=0.6)
        mtm = fwd.calculate_mtm(0.6, underlying, collateral_curve)
        assert fwd.is_expired(0.6)
        assert np.array_equal(mtm.samples, [0.0, 0.0])

    def test_front_office_value(
        self, collateral_curve: DiscountCurve, funding_curve: DiscountCurve
    ) -> None:
        """Front office price discounts at the unsecured rate."""
        fwd = EquityForward(strike=80.0, maturity=0.999, quantity=1000.0)
        expected = 1000.0 * (
            100.0 * np.exp(-(0.05 - 0.01) * 0.999) - 80.0 * np.exp(-0.05 * 0.999)
        )
        fo = fwd.front_office_value(100.0, collateral_curve, funding_curve)
        assert fo == pytest.approx(expected)
        assert fo < fwd.analytic_value(100.0, collateral_curve)

    def test_front_office_equals_desk_without_spread(
        self, collateral_curve: DiscountCurve
    ) -> None:
        """With r_u = r_c both views agree."""
        fwd = EquityForward(strike=80.0, maturity=0.999, quantity=1000.0)
        assert fwd.front_office_value(100.0, collateral_curve, collateral_curve) == pytest.approx(
            fwd.analytic_value(100.0, collateral_curve)
        )

    def test_monte_carlo_matches_closed_form(self, collateral_curve: DiscountCurve) -> None:
        """Monte Carlo price within four (antithetic) standard errors."""
        maturity = 0.999
        grid = TimeGrid(np.array([0.0, maturity]))
        paths = BlackScholesModel(
            grid, n_paths=10_000, volatility=0.25, seed=3141, antithetic=True
        ).simulate()
        fwd = EquityForward(strike=80.0, maturity=maturity, quantity=1000.0)

        terminal = paths.values[-1]
        pair_means = 0.5 * (terminal[:5000] + terminal[5000:])
        standard_error = np.std(pair_means) / np.sqrt(pair_means.size)
        tolerance = 4 * 1000.0 * np.exp(-0.01 * maturity) * standard_error

        mc = fwd.monte_carlo_value(paths, collateral_curve)
        exact = fwd.analytic_value(100.0, collateral_curve)
        assert abs(mc - exact) <= tolerance

    def test_analytic_value_from_later_start(self, collateral_curve: DiscountCurve) -> None:
        """V(t_0) = q (S(t_0) - K exp(-r (T - t_0)))."""
        fwd = EquityForward(strike=80.0, maturity=1.0)
        expected = 100.0 - 80.0 * np.exp(-0.01 * 0.5)
        assert fwd.analytic_value(100.0, collateral_curve, 0.5) == pytest.approx(expected)

    def test_front_office_value_from_later_start(
        self, collateral_curve: DiscountCurve, funding_curve: DiscountCurve
    ) -> None:
        """The front office price uses the remaining life T - t_0."""
        fwd = EquityForward(strike=80.0, maturity=1.0)
        expected = 100.0 * np.exp(-(0.05 - 0.01) * 0.5) - 80.0 * np.exp(-0.05 * 0.5)
        fo = fwd.front_office_value(100.0, collateral_curve, funding_curve, 0.5)
        assert fo == pytest.approx(expected)

    def test_monte_carlo_on_shifted_grid(self, collateral_curve: DiscountCurve) -> None:
        """Without volatility the Monte Carlo price equals the closed form at t_0."""
        grid = TimeGrid.uniform(0.5, 51, 0.01)
        paths = BlackScholesModel(grid, n_paths=16, volatility=0.0, seed=7).simulate()
        fwd = EquityForward(strike=80.0, maturity=grid.horizon)

        mc = fwd.monte_carlo_value(paths, collateral_curve)
        assert mc == pytest.approx(fwd.analytic_value(100.0, collateral_curve, 0.5))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"strike": 80.0, "maturity": 1.0, "sign": 0},
            {"strike": 80.0, "maturity": 1.0, "quantity": 0.0},
            {"strike": -1.0, "maturity": 1.0},
            {"strike": 80.0, "maturity": -0.5},
        ],
    )
    def test_invalid_parameters(self, kwargs: dict) -> None:
        """Invalid forward parameters should raise."""
        with pytest.raises(InvalidParameter):
            EquityForward(**kwargs)

    def test_to_dict(self) -> None:
        """Serialization keeps all deal terms."""
        fwd = EquityForward(strike=90.0, maturity=0.5, quantity=10.0, sign=-1)
        assert fwd.to_dict() == {
            "type": "EQUITY_FORWARD",
            "strike": 90.0,
            "maturity": 0.5,
            "quantity": 10.0,
            "sign": -1,
        }
        assert fwd.instrument_type is InstrumentType.EQUITY_FORWARD

    def test_from_config(self) -> None:
        """Forward built from a resolved configuration."""
        config = ForwardConfig(strike=90.0, maturity=0.75, quantity=5.0, sign=-1)
        fwd = EquityForward.from_config(config)
        assert (fwd.strike, fwd.maturity, fwd.quantity, fwd.sign) == (90.0, 0.75, 5.0, -1)

    def test_from_config_needs_maturity(self) -> None:
        """An unresolved maturity should raise."""
        with pytest.raises(InvalidParameter):
            EquityForward.from_config(ForwardConfig(strike=90.0))

    def test_repr(self) -> None:
        """String representation names the direction."""
        assert "Short" in repr(EquityForward(strike=90.0, maturity=0.5, sign=-1))
