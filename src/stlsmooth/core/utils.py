import math

import numpy as np


def centered_support(n, rounding="ceil"):
    """
    Support ``1..n`` shifted so that index 0 sits at the middle of the series.

    The low-pass filter uses ``ceil`` and the trend smoother ``floor`` so
    that, for even lengths, the rounding of the two shifts goes in opposite
    directions.
    """
    if rounding == "ceil":
        shift = math.ceil(n / 2)
    elif rounding == "floor":
        shift = math.floor(n / 2)
    else:
        raise ValueError(f"rounding must be 'ceil' or 'floor', got {rounding!r}")
    return np.arange(1, n + 1, dtype=float) - shift


def bicube(u):
    """
    Bicube weight function ``(1 - u**2)**2`` for ``u < 1``, 0 otherwise.

    Missing inputs get weight 0.
    """
    u = np.asarray(u, dtype=float)
    with np.errstate(invalid="ignore"):
        inside = ~np.isnan(u) & (u < 1.0)
    return np.where(inside, (1.0 - np.where(inside, u, 0.0) ** 2) ** 2, 0.0)


def robustness_weights(remainder, atol=0.0):
    """
    Robustness weights from the remainder of the current fit.

    Parameters
    ----------
    remainder : numpy.ndarray
        ``y - trend - seasonal``, ``nan`` where ``y`` is missing.
    atol : float, default=0.0
        Residuals at or below ``atol`` in absolute value count as an exact
        fit. See :func:`noise_floor`.

    Returns
    -------
    numpy.ndarray
        ``bicube(|R| / h)`` with ``h = 6 * median(|R|)`` over the present
        residuals. When ``h`` does not exceed ``atol`` the fit is exact on at
        least half of the observations; those keep weight 1 and every other
        one gets 0.
    """
    abs_remainder = np.abs(np.asarray(remainder, dtype=float))
    present = ~np.isnan(abs_remainder)
    if not np.any(present):
        return np.zeros_like(abs_remainder)

    h = 6.0 * np.median(abs_remainder[present])
    if h <= atol:
        return np.where(present & (abs_remainder <= atol), 1.0, 0.0)
    return bicube(abs_remainder / h)


def convergence_ratio(current, previous, atol=0.0):
    """
    ``max|current - previous| / (max(previous) - min(previous))``.

    Missing values are skipped. The ratio is ``nan`` when nothing is left to
    compare. A previous component whose spread does not exceed ``atol`` is
    treated as constant: the ratio is then 0 if the component moved by at
    most ``atol`` and ``inf`` otherwise.
    """
    diff = np.abs(np.asarray(current, dtype=float) - np.asarray(previous, dtype=float))
    diff = diff[~np.isnan(diff)]
    prev = np.asarray(previous, dtype=float)
    prev = prev[~np.isnan(prev)]
    if diff.size == 0 or prev.size == 0:
        return np.nan

    md = diff.max()
    spread = prev.max() - prev.min()
    if spread > atol:
        return md / spread
    return 0.0 if md <= atol else np.inf


def is_converged(ratio, threshold):
    return bool(np.isfinite(ratio) and ratio < threshold)


def noise_floor(y):
    """
    Round-off level of quantities derived from ``y``.

    Spreads and residuals below ``sqrt(eps) * max|y|`` are indistinguishable
    from zero once ``y`` has gone through the smoothers, e.g. the seasonal
    component of a constant series.
    """
    scale = np.nanmax(np.abs(y))
    return float(np.sqrt(np.finfo(float).eps) * scale)
