"""STLResult: structured container for an STL decomposition."""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from stlsmooth.core.checker import STLConfig
from stlsmooth.core.state import LoopStatus


@dataclass
class STLResult:
    """Components of an STL decomposition.

    Attributes
    ----------
    seasonal : numpy.ndarray
        Seasonal component, defined at every index.
    trend : numpy.ndarray
        Trend component, defined at every index.
    remainder : numpy.ndarray
        ``y - trend - seasonal``; ``nan`` where ``y`` is missing.
    weights : numpy.ndarray
        Robustness weights after the last update. All ones when no update
        took place.
    seasonal_converged : bool
        Whether the seasonal convergence ratio fell below the threshold.
    trend_converged : bool
        Whether the trend convergence ratio fell below the threshold.
    status : LoopStatus
        How the outer loop ended.
    outer_cycles : int
        Number of outer cycles run.
    config : STLConfig
        The configuration used.
    """

    seasonal: np.ndarray
    trend: np.ndarray
    remainder: np.ndarray
    weights: np.ndarray
    seasonal_converged: bool
    trend_converged: bool
    status: LoopStatus
    outer_cycles: int
    config: STLConfig

    def __len__(self):
        return len(self.seasonal)

    @property
    def fitted(self):
        """Seasonal plus trend."""
        return self.seasonal + self.trend

    @property
    def converged(self):
        return self.seasonal_converged and self.trend_converged

    def to_dataframe(self, index=None):
        """Components as a DataFrame with columns Seasonal, Trend and Remainder."""
        return pd.DataFrame(
            {
                "Seasonal": self.seasonal,
                "Trend": self.trend,
                "Remainder": self.remainder,
            },
            index=index,
        )

    def __repr__(self):
        return (
            f"STLResult(n={len(self)}, period={self.config.period}, "
            f"status={self.status.value}, outer_cycles={self.outer_cycles})"
        )
