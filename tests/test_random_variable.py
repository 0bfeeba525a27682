"""
Tests for the immutable Monte Carlo random variable.
"""

import numpy as np
import pytest

from pathwise_xva.errors import InvalidParameter, NumericalDomain, ShapeMismatch
from pathwise_xva.stochastic import RandomVariable


@pytest.fixture
def x() -> RandomVariable:
    """Small random variable with mixed signs."""
    return RandomVariable(np.array([-2.0, -1.0, 1.0, 4.0]), time=0.5)


@pytest.fixture
def y() -> RandomVariable:
    """Second random variable with the same sample count."""
    return RandomVariable(np.array([1.0, 2.0, 3.0, 4.0]), time=0.7)


class TestConstruction:
    """Tests for construction and storage."""

    def test_samples_are_read_only(self, x: RandomVariable) -> None:
        """Writes through the sample view should fail."""
        with pytest.raises(ValueError):
            x.samples[0] = 10.0

    def test_caller_buffer_is_copied(self) -> None:
        """Mutating the source array should not change the random variable."""
        source = np.array([1.0, 2.0, 3.0])
        rv = RandomVariable(source)
        source[0] = 99.0
        assert rv.samples[0] == 1.0

    def test_read_only_buffer_is_shared(self) -> None:
        """A read-only float64 buffer is adopted without a copy."""
        source = np.arange(5, dtype=np.float64)
        source.flags.writeable = False
        rv = RandomVariable(source)
        assert np.shares_memory(rv.samples, source)

    def test_read_only_view_of_writeable_buffer_is_copied(self) -> None:
        """A read-only view over a writeable array is not adopted."""
        source = np.array([1.0, 2.0, 3.0])
        view = source[:]
        view.flags.writeable = False
        rv = RandomVariable(view)
        source[0] = -5.0
        assert rv.samples[0] == 1.0
        assert not np.shares_memory(rv.samples, source)

    def test_constant(self) -> None:
        """Constant broadcasts one value to every sample."""
        rv = RandomVariable.constant(3.5, 10, time=0.25)
        assert rv.n_samples == 10
        assert rv.time == 0.25
        assert rv.is_deterministic
        assert np.all(rv.samples == 3.5)

    def test_two_dimensional_rejected(self) -> None:
        """Realisations must be a vector."""
        with pytest.raises(ShapeMismatch):
            RandomVariable(np.ones((2, 3)))

    def test_empty_rejected(self) -> None:
        """At least one sample is required."""
        with pytest.raises(InvalidParameter):
            RandomVariable(np.array([]))

    def test_constant_needs_samples(self) -> None:
        """Constant with zero samples should raise."""
        with pytest.raises(InvalidParameter):
            RandomVariable.constant(1.0, 0)


class TestArithmetic:
    """Tests for pointwise operations."""

    def test_scalar_operations(self, x: RandomVariable) -> None:
        """Scalar operands broadcast over all samples."""
        assert np.array_equal(x.add(1.0).samples, [-1.0, 0.0, 2.0, 5.0])
        assert np.array_equal(x.sub(1.0).samples, [-3.0, -2.0, 0.0, 3.0])
        assert np.array_equal(x.mult(2.0).samples, [-4.0, -2.0, 2.0, 8.0])
        assert np.array_equal(x.div(2.0).samples, [-1.0, -0.5, 0.5, 2.0])

    def test_random_variable_operations(self, x: RandomVariable, y: RandomVariable) -> None:
        """Random variable operands combine sample by sample."""
        assert np.array_equal((x + y).samples, [-1.0, 1.0, 4.0, 8.0])
        assert np.array_equal((x - y).samples, [-3.0, -3.0, -2.0, 0.0])
        assert np.array_equal((x * y).samples, [-2.0, -2.0, 3.0, 16.0])
        assert np.allclose((x / y).samples, [-2.0, -0.5, 1.0 / 3.0, 1.0])

    def test_reflected_operators(self, x: RandomVariable) -> None:
        """Scalars on the left-hand side produce random variables."""
        assert np.array_equal((1.0 + x).samples, [-1.0, 0.0, 2.0, 5.0])
        assert np.array_equal((1.0 - x).samples, [3.0, 2.0, 0.0, -3.0])
        assert np.array_equal((2.0 * x).samples, [-4.0, -2.0, 2.0, 8.0])
        assert np.allclose((4.0 / x).samples, [-2.0, -4.0, 4.0, 1.0])

    def test_numpy_scalar_on_left(self, x: RandomVariable) -> None:
        """numpy scalars defer to the reflected operators."""
        result = np.float64(2.0) * x
        assert isinstance(result, RandomVariable)
        assert np.array_equal(result.samples, [-4.0, -2.0, 2.0, 8.0])

    def test_negation(self, x: RandomVariable) -> None:
        """Unary minus and neg agree."""
        assert np.array_equal((-x).samples, x.neg().samples)
        assert np.array_equal(x.neg().samples, [2.0, 1.0, -1.0, -4.0])

    def test_floor_and_cap(self, x: RandomVariable) -> None:
        """floor(0) keeps the positive part, cap(0) the negative part."""
        assert np.array_equal(x.floor(0.0).samples, [0.0, 0.0, 1.0, 4.0])
        assert np.array_equal(x.cap(0.0).samples, [-2.0, -1.0, 0.0, 0.0])

    def test_positive_plus_negative_part(self, x: RandomVariable) -> None:
        """floor(X, 0) + cap(X, 0) should give back X exactly."""
        assert np.array_equal((x.floor(0.0) + x.cap(0.0)).samples, x.samples)

    def test_operations_do_not_mutate(self, x: RandomVariable, y: RandomVariable) -> None:
        """Operands are unchanged after an operation."""
        before = x.samples.copy()
        _ = x.add(y).mult(3.0).floor(0.0)
        assert np.array_equal(x.samples, before)

    def test_result_time_is_latest(self, x: RandomVariable, y: RandomVariable) -> None:
        """Binary results carry the later of the operand times."""
        assert x.add(y).time == 0.7
        assert x.add(1.0).time == 0.5

    def test_shape_mismatch(self, x: RandomVariable) -> None:
        """Combining different sample counts should raise."""
        other = RandomVariable(np.ones(3))
        with pytest.raises(ShapeMismatch):
            x.add(other)

    def test_division_by_zero(self, x: RandomVariable) -> None:
        """Division by zero should raise NumericalDomain."""
        with pytest.raises(NumericalDomain):
            x.div(0.0)
        with pytest.raises(NumericalDomain):
            x.div(RandomVariable(np.array([1.0, 0.0, 1.0, 1.0])))
        with pytest.raises(NumericalDomain):
            1.0 / RandomVariable(np.array([1.0, 0.0]))

    def test_exp_log_inverse(self, y: RandomVariable) -> None:
        """log(exp(X)) should recover X."""
        assert np.allclose(y.exp().log().samples, y.samples)

    def test_log_domain(self, x: RandomVariable) -> None:
        """Log of non-positive samples should raise."""
        with pytest.raises(NumericalDomain):
            x.log()

    def test_algebra_laws(self, x: RandomVariable, y: RandomVariable) -> None:
        """Commutativity and inverse operations hold pointwise."""
        assert np.array_equal((x + y).samples, (y + x).samples)
        assert np.array_equal((x * y).samples, (y * x).samples)
        assert np.allclose(((x + y) - y).samples, x.samples)
        assert np.allclose(((x * y) / y).samples, x.samples)


class TestReductions:
    """Tests for scalar reductions."""

    def test_mean(self, x: RandomVariable) -> None:
        """Mean of the samples."""
        assert x.mean() == pytest.approx(0.5)

    def test_mean_is_linear(self, x: RandomVariable, y: RandomVariable) -> None:
        """mean(aX + bY) = a mean(X) + b mean(Y)."""
        a, b = 2.5, -0.75
        combined = x * a + y * b
        assert combined.mean() == pytest.approx(a * x.mean() + b * y.mean())

        rng = np.random.default_rng(11)
        u = RandomVariable(rng.standard_normal(1001))
        v = RandomVariable(rng.lognormal(size=1001))
        assert (3.0 * u - 4.0 * v).mean() == pytest.approx(3.0 * u.mean() - 4.0 * v.mean())

    def test_deterministic_mean_is_exact(self) -> None:
        """A constant's mean is its value, with no summation error."""
        value = 0.1 + 0.2
        rv = RandomVariable.constant(value, 10_001)
        assert rv.mean() == value

    def test_variance_and_standard_error(self, y: RandomVariable) -> None:
        """Population variance and standard error of the mean."""
        assert y.variance() == pytest.approx(1.25)
        assert y.standard_error() == pytest.approx(np.sqrt(1.25 / 4))

    def test_min_max(self, x: RandomVariable) -> None:
        """Extremes of the samples."""
        assert x.min() == -2.0
        assert x.max() == 4.0

    def test_quantile_lower_element(self) -> None:
        """Quantile returns element floor(α(M-1)) of the sorted samples."""
        rng = np.random.default_rng(7)
        rv = RandomVariable(rng.permutation(np.arange(10, dtype=np.float64)))
        # floor(0.95 * 9) = 8
        assert rv.quantile(0.95) == 8.0
        # floor(0.5 * 9) = 4
        assert rv.quantile(0.5) == 4.0
        assert rv.quantile(0.01) == 0.0

    def test_quantile_monotone(self) -> None:
        """Higher levels give higher (or equal) quantiles."""
        rv = RandomVariable(np.random.default_rng(1).standard_normal(1000))
        assert rv.quantile(0.90) <= rv.quantile(0.95) <= rv.quantile(0.99)

    @pytest.mark.parametrize("alpha", [0.01, 0.05, 0.5, 0.95, 0.99])
    def test_quantile_shift_equivariant(self, alpha: float) -> None:
        """quantile(X + c, α) = quantile(X, α) + c."""
        rv = RandomVariable(np.random.default_rng(5).standard_normal(1001))
        for c in (-3.0, 0.5, 120.0):
            assert (rv + c).quantile(alpha) == pytest.approx(rv.quantile(alpha) + c)

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5])
    def test_quantile_level_validation(self, x: RandomVariable, alpha: float) -> None:
        """Levels outside (0, 1) should raise."""
        with pytest.raises(InvalidParameter):
            x.quantile(alpha)

    def test_constant_quantile_equals_mean(self) -> None:
        """Every quantile of a constant is the constant."""
        rv = RandomVariable.constant(-7.25, 100)
        assert rv.quantile(0.95) == rv.mean() == -7.25
