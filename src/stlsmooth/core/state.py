"""Loop state of the STL decomposition."""

from dataclasses import dataclass, replace
from enum import Enum

import numpy as np


class LoopStatus(Enum):
    """Status of the outer loop, evaluated once per outer cycle."""

    RUNNING = "running"
    CONVERGED = "converged"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass(frozen=True)
class STLState:
    """
    Everything the inner and outer loops carry from one step to the next.

    ``seasonal_prev`` holds the detrended series of the previous inner cycle
    and ``trend_prev`` the previous trend; both are compared with the
    current values to decide convergence.
    """

    seasonal: np.ndarray
    trend: np.ndarray
    seasonal_prev: np.ndarray
    trend_prev: np.ndarray
    weights: np.ndarray
    seasonal_converged: bool = False
    trend_converged: bool = False
    seasonal_ratio: float = np.nan
    trend_ratio: float = np.nan

    @classmethod
    def initial(cls, n):
        """State at the start of a run: zero components, full weights."""
        return cls(
            seasonal=np.zeros(n),
            trend=np.zeros(n),
            seasonal_prev=np.zeros(n),
            trend_prev=np.zeros(n),
            weights=np.ones(n),
        )

    @property
    def converged(self):
        return self.seasonal_converged and self.trend_converged

    def evolve(self, **changes):
        return replace(self, **changes)
