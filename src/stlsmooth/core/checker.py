"""Argument checking and default resolution for the STL decomposition."""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class STLConfig:
    """Resolved, validated STL configuration.

    Attributes
    ----------
    period : int
        Number of observations per seasonal cycle (``np``).
    ns : int
        Seasonal smoothing window. Odd and at least 7.
    nt : int
        Trend smoothing window.
    nl : int
        Low-pass filter window.
    ni : int
        Number of inner loop cycles.
    no : int or None
        Number of outer loop cycles. ``None`` means unbounded, which is only
        produced in robust mode where the loop stops on convergence.
    robust : bool
        Whether robustness weights are iterated until convergence.
    seasonal_post_smooth : bool
        Whether the seasonal component is smoothed once more at the end.
    post_smooth_window : int
        Loess window of the seasonal post-smoothing.
    convergence_threshold : float
        Threshold on the convergence ratios of seasonal and trend.
    verbose : bool
        Print convergence ratios for every inner cycle.
    max_outer : int
        Hard cap on the number of outer cycles in robust mode.
    n_jobs : int
        Number of joblib workers for cycle-subseries smoothing.
    """

    period: int
    ns: int
    nt: int
    nl: int
    ni: int
    no: Optional[int]
    robust: bool = False
    seasonal_post_smooth: bool = False
    post_smooth_window: int = 2
    convergence_threshold: float = 0.01
    verbose: bool = False
    max_outer: int = 100
    n_jobs: int = 1


def smallest_odd_geq(x):
    """
    Return the smallest odd integer greater than or equal to ``x``.

    Parameters
    ----------
    x : float
        Any finite real number.

    Returns
    -------
    int
        ``ceil(x)`` when it is odd, ``ceil(x) + 1`` otherwise.

    Examples
    --------
    >>> smallest_odd_geq(12)
    13
    >>> smallest_odd_geq(6.2)
    7
    >>> smallest_odd_geq(-2)
    -1
    """
    if not np.isfinite(x):
        raise ValueError(f"x must be finite, got {x}")
    cx = int(math.ceil(x))
    return cx + 1 if cx % 2 == 0 else cx


def _check_positive_int(value, name):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return int(value)


def _check_seasonal_window(ns):
    if isinstance(ns, (bool, np.bool_)) or not isinstance(ns, (int, np.integer)):
        raise ValueError(f"ns must be an integer, got {ns!r}")
    if ns % 2 == 0 or ns < 7:
        raise ValueError(
            "`ns` is chosen on the basis of knowledge of the time series and on the "
            "basis of diagnostic methods; it must always be odd and at least 7, "
            f"got {ns}"
        )
    return int(ns)


def _check_data(y):
    y = np.asarray(y, dtype=float)
    if y.ndim != 1:
        raise ValueError(f"y must be one-dimensional, got shape {y.shape}")
    if y.size == 0:
        raise ValueError("y must be non-empty")
    if np.all(np.isnan(y)):
        raise ValueError("y must contain at least one non-missing observation")
    return y


def check_stl_parameters(
    y,
    period,
    robust=False,
    nl=None,
    ns=None,
    nt=None,
    ni=None,
    no=None,
    seasonal_post_smooth=False,
    post_smooth_window=None,
    convergence_threshold=0.01,
    verbose=False,
    max_outer=100,
    n_jobs=1,
):
    """
    Validate the STL arguments and fill in the defaults.

    Defaults follow Cleveland et al. (1990) where the paper recommends a
    value. The paper gives no default for ``ns``; the one used here,
    ``10 * len(y) + 1``, is the window R's ``stl(s.window = "periodic")``
    uses and makes every cycle-subseries almost a straight line fit.

    Parameters
    ----------
    y : array-like
        The series to decompose, ``nan`` for missing values.
    period : int
        Seasonal period, at least 2.
    robust : bool, default=False
        Robust mode: iterate the outer loop until convergence.
    nl, ns, nt, ni, no : int, optional
        Low-pass, seasonal and trend windows and the inner/outer cycle
        counts. ``None`` selects the default.
    seasonal_post_smooth : bool, default=False
        Smooth the seasonal component once more after the loops.
    post_smooth_window : int, optional
        Window of the post-smoothing, ``max(period // 7, 2)`` by default.
        Windows of 4 or less leave the seasonal component unchanged.
    convergence_threshold : float, default=0.01
        Threshold applied to both convergence ratios.
    verbose : bool, default=False
        Print convergence diagnostics.
    max_outer : int, default=100
        Safety cap on outer cycles in robust mode.
    n_jobs : int, default=1
        Workers used for cycle-subseries smoothing.

    Returns
    -------
    tuple of (numpy.ndarray, STLConfig)
        The data as a float array and the resolved configuration.

    Raises
    ------
    ValueError
        If ``ns`` is even or smaller than 7, or any other argument is out of
        range.
    """
    y = _check_data(y)
    obs_in_sample = y.size

    period = _check_positive_int(period, "period")
    if period < 2:
        raise ValueError(f"period must be at least 2, got {period}")
    present = ~np.isnan(y)
    empty_phases = [j for j in range(period) if not np.any(present[j::period])]
    if empty_phases:
        raise ValueError(
            "Every cycle-subseries needs at least one observation; phases "
            f"{empty_phases} have none (n={obs_in_sample}, period={period})"
        )

    ns = _check_seasonal_window(10 * obs_in_sample + 1 if ns is None else ns)
    nl = _check_positive_int(smallest_odd_geq(period) if nl is None else nl, "nl")
    if nt is None:
        nt = smallest_odd_geq(1.5 * period / (1 - 1.5 / ns))
    nt = _check_positive_int(nt, "nt")
    ni = _check_positive_int((1 if robust else 2) if ni is None else ni, "ni")

    if no is None:
        no = None if robust else 0
    elif isinstance(no, (bool, np.bool_)) or not isinstance(no, (int, np.integer)) or no < 0:
        raise ValueError(f"no must be a non-negative integer, got {no!r}")
    else:
        no = int(no)

    if post_smooth_window is None:
        post_smooth_window = max(period // 7, 2)
    post_smooth_window = _check_positive_int(post_smooth_window, "post_smooth_window")

    if not convergence_threshold > 0:
        raise ValueError(
            f"convergence_threshold must be positive, got {convergence_threshold}"
        )
    max_outer = _check_positive_int(max_outer, "max_outer")
    if not isinstance(n_jobs, (int, np.integer)) or n_jobs == 0:
        raise ValueError(f"n_jobs must be a non-zero integer, got {n_jobs!r}")

    config = STLConfig(
        period=period,
        ns=ns,
        nt=nt,
        nl=nl,
        ni=ni,
        no=no,
        robust=bool(robust),
        seasonal_post_smooth=bool(seasonal_post_smooth),
        post_smooth_window=post_smooth_window,
        convergence_threshold=float(convergence_threshold),
        verbose=bool(verbose),
        max_outer=max_outer,
        n_jobs=int(n_jobs),
    )
    return y, config
