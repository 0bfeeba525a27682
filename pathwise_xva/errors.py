"""
Error kinds raised by the pathwise xVA engine.

All errors derive from ``XVAError`` which is itself a ``ValueError``, so
callers may catch either the specific kind or the broad family. Monte Carlo
noise is never reported as an error.
"""


class XVAError(ValueError):
    """Base class for all engine errors."""


class InvalidGrid(XVAError):
    """Time grid is empty, non-finite, non-monotonic or degenerate."""


class ShapeMismatch(XVAError):
    """Random variables (or series) with differing sample counts were combined."""


class InvalidParameter(XVAError):
    """A model or calculator parameter lies outside its admissible range."""


class OutOfGridMaturity(XVAError):
    """A deal matures outside the simulation time grid."""


class NumericalDomain(XVAError):
    """An operation was applied outside its numerical domain (e.g. log of x <= 0)."""
