"""
Stochastic primitives: time discretization and Monte Carlo random variables.
"""

from pathwise_xva.stochastic.random_variable import RandomVariable
from pathwise_xva.stochastic.time_grid import TimeGrid

__all__ = [
    "RandomVariable",
    "TimeGrid",
]
