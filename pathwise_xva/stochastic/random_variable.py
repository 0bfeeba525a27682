"""
Immutable Monte Carlo random variable.

A random variable is the vector of realisations of a quantity over all
simulation paths at one time point. Every operation returns a new random
variable; the underlying sample buffer is read-only and may be shared
freely.
"""

from typing import Union

import numpy as np
import numpy.typing as npt

from pathwise_xva._types import FloatArray
from pathwise_xva.errors import InvalidParameter, NumericalDomain, ShapeMismatch

Operand = Union["RandomVariable", float, int]


def is_read_only(values: np.ndarray) -> bool:
    """True if neither the array nor any array it is a view of is writeable."""
    base = values
    while isinstance(base, np.ndarray):
        if base.flags.writeable:
            return False
        base = base.base
    return True


class RandomVariable:
    """
    Vector of realisations (t, v) with a fixed sample count M.

    The time is advisory (provenance and plotting); it never affects
    arithmetic. Binary operations carry the later of the two times.

    Attributes
    ----------
    time : float
        Associated time point in years
    samples : FloatArray
        Read-only realisations, shape (M,)

    Example
    -------
    >>> x = RandomVariable(np.array([-2.0, -1.0, 1.0, 4.0]), time=0.5)
    >>> x.floor(0.0).mean()
    1.25
    >>> (x * 2 + 1).quantile(0.5)
    -1.0
    """

    __slots__ = ("_time", "_samples")

    # numpy scalars on the left-hand side defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, samples: npt.ArrayLike, time: float = 0.0) -> None:
        values = np.asarray(samples, dtype=np.float64)
        if values.ndim != 1:
            raise ShapeMismatch(
                f"Realisations must be one-dimensional, got shape {values.shape}"
            )
        if values.size == 0:
            raise InvalidParameter("A random variable needs at least one sample")

        if not is_read_only(values):
            # Private copy: writes through the caller's buffer must not leak in
            values = values.copy()
            values.flags.writeable = False

        self._time = float(time)
        self._samples = values

    @classmethod
    def _wrap(cls, values: FloatArray, time: float) -> "RandomVariable":
        """Adopt a freshly computed buffer without copying it."""
        values.flags.writeable = False
        rv = cls.__new__(cls)
        rv._time = time
        rv._samples = values
        return rv

    @classmethod
    def constant(cls, value: float, n_samples: int, time: float = 0.0) -> "RandomVariable":
        """
        Create a deterministic random variable (scalar broadcast to M samples).

        Parameters
        ----------
        value : float
            Value of every realisation
        n_samples : int
            Sample count M
        time : float
            Associated time

        Returns
        -------
        RandomVariable
            Constant random variable
        """
        if n_samples < 1:
            raise InvalidParameter(f"n_samples must be positive, got {n_samples}")
        return cls(np.full(n_samples, float(value)), time=time)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def time(self) -> float:
        """Associated time in years."""
        return self._time

    @property
    def samples(self) -> FloatArray:
        """Read-only view of the realisations."""
        return self._samples

    @property
    def n_samples(self) -> int:
        """Sample count M."""
        return int(self._samples.size)

    def __len__(self) -> int:
        return self.n_samples

    @property
    def is_deterministic(self) -> bool:
        """True if all realisations are identical."""
        return bool(np.all(self._samples == self._samples[0]))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _operand(self, other: Operand) -> tuple[FloatArray | float, float]:
        """Return the raw operand values and the time of the result."""
        if isinstance(other, RandomVariable):
            if other.n_samples != self.n_samples:
                raise ShapeMismatch(
                    f"Cannot combine random variables with {self.n_samples} "
                    f"and {other.n_samples} samples"
                )
            return other._samples, max(self._time, other._time)
        return float(other), self._time

    def add(self, other: Operand) -> "RandomVariable":
        """Pointwise sum."""
        values, time = self._operand(other)
        return RandomVariable._wrap(self._samples + values, time)

    def sub(self, other: Operand) -> "RandomVariable":
        """Pointwise difference."""
        values, time = self._operand(other)
        return RandomVariable._wrap(self._samples - values, time)

    def mult(self, other: Operand) -> "RandomVariable":
        """Pointwise product."""
        values, time = self._operand(other)
        return RandomVariable._wrap(self._samples * values, time)

    def div(self, other: Operand) -> "RandomVariable":
        """
        Pointwise quotient.

        Raises
        ------
        NumericalDomain
            If the divisor is (or contains) zero
        """
        values, time = self._operand(other)
        if np.any(np.asarray(values) == 0.0):
            raise NumericalDomain("Division by zero")
        return RandomVariable._wrap(self._samples / values, time)

    def neg(self) -> "RandomVariable":
        """Pointwise negation."""
        return RandomVariable._wrap(-self._samples, self._time)

    def floor(self, threshold: float) -> "RandomVariable":
        """Lower-bound clip: max(v, threshold). floor(0) is the positive part."""
        return RandomVariable._wrap(np.maximum(self._samples, threshold), self._time)

    def cap(self, threshold: float) -> "RandomVariable":
        """Upper-bound clip: min(v, threshold). cap(0) is the negative part."""
        return RandomVariable._wrap(np.minimum(self._samples, threshold), self._time)

    def exp(self) -> "RandomVariable":
        """Pointwise exponential."""
        return RandomVariable._wrap(np.exp(self._samples), self._time)

    def log(self) -> "RandomVariable":
        """
        Pointwise natural logarithm.

        Raises
        ------
        NumericalDomain
            If any realisation is non-positive
        """
        if np.any(self._samples <= 0.0):
            raise NumericalDomain("Logarithm of a non-positive realisation")
        return RandomVariable._wrap(np.log(self._samples), self._time)

    __add__ = add
    __sub__ = sub
    __mul__ = mult
    __truediv__ = div
    __neg__ = neg

    def __radd__(self, other: float) -> "RandomVariable":
        return self.add(other)

    def __rsub__(self, other: float) -> "RandomVariable":
        return self.neg().add(other)

    def __rmul__(self, other: float) -> "RandomVariable":
        return self.mult(other)

    def __rtruediv__(self, other: float) -> "RandomVariable":
        if np.any(self._samples == 0.0):
            raise NumericalDomain("Division by zero")
        return RandomVariable._wrap(float(other) / self._samples, self._time)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def mean(self) -> float:
        """
        Arithmetic mean over the samples (pairwise summation).

        A deterministic random variable returns its value exactly.
        """
        if self.is_deterministic:
            return float(self._samples[0])
        return float(np.mean(self._samples))

    def variance(self) -> float:
        """Population variance over the samples."""
        return float(np.var(self._samples))

    def standard_error(self) -> float:
        """Monte Carlo standard error of the mean, sqrt(variance / M)."""
        return float(np.sqrt(self.variance() / self.n_samples))

    def min(self) -> float:
        """Smallest realisation."""
        return float(np.min(self._samples))

    def max(self) -> float:
        """Largest realisation."""
        return float(np.max(self._samples))

    def quantile(self, alpha: float) -> float:
        """
        Empirical alpha-quantile.

        Returns the element at index floor(alpha * (M - 1)) of the
        ascending sort, i.e. the lower element with no interpolation.

        Parameters
        ----------
        alpha : float
            Quantile level in (0, 1)

        Returns
        -------
        float
            Quantile value

        Raises
        ------
        InvalidParameter
            If alpha is not in (0, 1)
        """
        if not 0 < alpha < 1:
            raise InvalidParameter(f"Quantile level must be in (0, 1), got {alpha}")

        index = int(np.floor(alpha * (self.n_samples - 1)))
        return float(np.partition(self._samples, index)[index])

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"RandomVariable(t={self._time:.4f}, n_samples={self.n_samples}, "
            f"mean={self.mean():.6g})"
        )
