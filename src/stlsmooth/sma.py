"""Simple moving averages used by the STL low-pass filter."""

import numpy as np


def moving_average(x, window, center=True):
    """
    Simple moving average with a fixed window.

    Parameters
    ----------
    x : array-like
        Input series. Must not contain missing values.
    window : int
        Number of observations averaged, between 1 and ``len(x)``.
    center : bool, default=True
        Place each average at the middle of its window (at the left middle
        for even windows). Otherwise it is placed at the end of the window.

    Returns
    -------
    numpy.ndarray
        Array of the same length as ``x``. The ``window - 1`` positions whose
        window is incomplete are ``nan``.

    Examples
    --------
    >>> moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 3)
    array([nan,  2.,  3.,  4., nan])
    """
    x = np.asarray(x, dtype=float).ravel()
    window = int(window)
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")
    if window > x.size:
        raise ValueError(
            f"window ({window}) must not be larger than the series ({x.size})"
        )

    csum = np.cumsum(np.concatenate(([0.0], x)))
    averages = (csum[window:] - csum[:-window]) / window

    out = np.full(x.size, np.nan)
    offset = (window - 1) // 2 if center else window - 1
    out[offset : offset + averages.size] = averages
    return out


def triple_moving_average(x, period):
    """
    Low-pass moving averages of the STL procedure.

    Applies moving averages of length ``period``, ``period`` and 3 in turn,
    dropping the incomplete edges after every pass.

    Parameters
    ----------
    x : array-like
        Input series, typically the cycle-subseries buffer of length
        ``n + 2 * period``.
    period : int
        Seasonal period.

    Returns
    -------
    numpy.ndarray
        Array of length ``len(x) - 2 * period``.
    """
    out = np.asarray(x, dtype=float).ravel()
    for window in (period, period, 3):
        offset = (window - 1) // 2
        out = moving_average(out, window)[offset : offset + out.size - window + 1]
    return out
