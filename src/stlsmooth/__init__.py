from stlsmooth.core.checker import STLConfig, check_stl_parameters, smallest_odd_geq
from stlsmooth.core.result import STLResult
from stlsmooth.core.state import LoopStatus, STLState
from stlsmooth.core.stl import decompose, inner_cycle
from stlsmooth.core.utils import bicube, convergence_ratio, robustness_weights
from stlsmooth.loess import loess
from stlsmooth.sma import moving_average, triple_moving_average
from stlsmooth.timeseries import stl, stl_series
from stlsmooth.utils import show_versions

__all__ = [
    "stl",
    "stl_series",
    "decompose",
    "inner_cycle",
    "check_stl_parameters",
    "smallest_odd_geq",
    "STLConfig",
    "STLState",
    "STLResult",
    "LoopStatus",
    "bicube",
    "convergence_ratio",
    "robustness_weights",
    "loess",
    "moving_average",
    "triple_moving_average",
    "show_versions",
]
