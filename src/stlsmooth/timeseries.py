"""
Entry point of the STL decomposition for arrays and pandas series.
"""

import pandas as pd

from stlsmooth.core.stl import stl_array


def stl_series(series, period, **kwargs):
    """
    STL decomposition of a labeled series.

    Parameters
    ----------
    series : pandas.Series
        Series indexed by time. Missing values are ``nan`` (or ``None``).
    period : int
        Seasonal period in number of observations.
    **kwargs
        Passed on to :func:`stl`.

    Returns
    -------
    pandas.DataFrame
        Columns ``Seasonal``, ``Trend`` and ``Remainder`` on the index of
        ``series``.
    """
    values = pd.to_numeric(series, errors="raise").to_numpy(dtype=float, na_value=float("nan"))
    result = stl_array(values, period, **kwargs)
    return result.to_dataframe(index=series.index)


def stl(
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
    Decompose a time series into seasonal, trend and remainder components.

    "STL has a simple design that consists of a sequence of applications of
    the loess smoother; the simplicity allows analysis of the properties of
    the procedure and allows fast computation, even for very long time
    series and large amounts of trend and seasonal smoothing."
    (Cleveland et al., 1990)

    The procedure alternates an **inner loop**, which refines the seasonal
    and trend components for fixed robustness weights, and an **outer
    loop**, which recomputes the robustness weights from the remainder.

    **Inner loop** (``ni`` cycles, or fewer once both components converge):

    1. Detrending: ``y - trend``
    2. Cycle-subseries smoothing: loess (window ``ns``, degree 1) of every
       phase of the season, extended one period before and after the data
    3. Low-pass filtering: moving averages of length ``period``, ``period``
       and 3 followed by a loess of window ``nl``
    4. Detrending of the smoothed cycle-subseries: the seasonal component
       is the smoothed subseries minus the low-pass
    5. Deseasonalizing: ``y - seasonal``
    6. Trend smoothing: loess (window ``nt``, degree 1)

    **Outer loop**: robustness weights ``B(|R| / (6 * median|R|))`` with the
    bicube function ``B(u) = (1 - u**2)**2`` for ``u < 1`` and 0 otherwise.

    Parameters
    ----------
    y : array-like or pandas.Series
        Time series to decompose. ``nan`` or ``None`` marks a missing value.
    period : int
        Seasonal period (``np`` in the original paper), at least 2.
    robust : bool, default=False
        Robust estimation. The outer loop then runs until both the seasonal
        and the trend components converge.
    nl : int, optional
        Low-pass filter window. Defaults to the smallest odd integer
        ``>= period``.
    ns : int, optional
        Seasonal smoothing window; must be odd and at least 7. It should be
        chosen on the basis of knowledge of the series and of diagnostic
        methods. The paper gives no default; ``10 * len(y) + 1`` is used, as
        in R's ``stl(s.window = "periodic")``.
    nt : int, optional
        Trend smoothing window. Defaults to the smallest odd integer
        ``>= 1.5 * period / (1 - 1.5 / ns)``.
    ni : int, optional
        Number of inner loop cycles: 1 in robust mode, 2 otherwise.
    no : int, optional
        Number of outer loop cycles: 0 without robustness. In robust mode the
        default is unbounded and computations stop on convergence. The
        authors suggest 5 ("safe value") or 10 ("near certainty of
        convergence") when a fixed number is preferred.
    seasonal_post_smooth : bool, default=False
        Smooth the seasonal component once more with a loess of window
        ``post_smooth_window``.
    post_smooth_window : int, optional
        Window of the seasonal post-smoothing. Defaults to
        ``max(period // 7, 2)``, approximating the window 51 chosen in the
        paper for ``period = 365``. The loess gives zero weight to the
        ``post_smooth_window``-th neighbour, so windows of 4 or less fit every
        point from at most three points and return the seasonal component
        unchanged; with the default this happens for any period below 35.
    convergence_threshold : float, default=0.01
        Convergence threshold for the seasonal and trend components.
    verbose : bool, default=False
        Print the seasonal and trend convergence ratios of every inner
        cycle.
    max_outer : int, default=100
        Safety cap on the outer cycles of robust mode.
    n_jobs : int, default=1
        Workers for the cycle-subseries smoothing (joblib threads).

    Returns
    -------
    STLResult or pandas.DataFrame
        An :class:`STLResult` when ``y`` is array-like, a DataFrame with
        columns ``Seasonal``, ``Trend`` and ``Remainder`` on the index of
        ``y`` when ``y`` is a pandas Series.

    Raises
    ------
    ValueError
        If ``ns`` is even or smaller than 7, or any other argument is out of
        range.

    Warns
    -----
    RuntimeWarning
        When the seasonal or the trend component did not converge.

    References
    ----------
    Cleveland, R.B., Cleveland, W.S., McRae, J.E. and Terpenning, I. (1990)
    "STL: A Seasonal-Trend Decomposition Procedure Based on Loess". Journal
    of Official Statistics 6(1): 3-73.

    Examples
    --------
    >>> import numpy as np
    >>> from stlsmooth import stl
    >>> t = np.arange(120)
    >>> y = 0.01 * t + np.sin(2 * np.pi * t / 12)
    >>> result = stl(y, 12, robust=True)
    >>> result.seasonal[:3]
    array([...])

    With a pandas Series the time index is kept::

        >>> import pandas as pd
        >>> ts = pd.Series(y, index=pd.date_range("2000-01-01", periods=120, freq="MS"))
        >>> stl(ts, 12, ns=7).columns.tolist()
        ['Seasonal', 'Trend', 'Remainder']
    """
    kwargs = dict(
        robust=robust,
        nl=nl,
        ns=ns,
        nt=nt,
        ni=ni,
        no=no,
        seasonal_post_smooth=seasonal_post_smooth,
        post_smooth_window=post_smooth_window,
        convergence_threshold=convergence_threshold,
        verbose=verbose,
        max_outer=max_outer,
        n_jobs=n_jobs,
    )
    if isinstance(y, pd.Series):
        return stl_series(y, period, **kwargs)
    return stl_array(y, period, **kwargs)
