"""
LOESS (locally weighted polynomial regression) implementation.

This module provides the loess smoother used by every smoothing pass of the
STL decomposition. Unlike ``lowess`` it evaluates the local fit at arbitrary
points, including points outside the range of the data.
"""

import numpy as np
from scipy.linalg import lstsq


def _tricube(u):
    return np.where(u < 1.0, (1.0 - u**3) ** 3, 0.0)


def _local_fit(x, y, rho, x0, q, degree):
    """Value at ``x0`` of the local polynomial fitted to its ``q`` neighbours."""
    n = x.size
    dist = np.abs(x - x0)
    k = min(q, n)
    h = np.partition(dist, k - 1)[k - 1]
    if q > n:
        h *= q / n

    local = _tricube(dist / h) if h > 0 else np.zeros_like(dist)
    if not np.any(local > 0):
        # Bandwidth too narrow to reach any point with positive weight
        local = (dist <= h).astype(float)

    w = local * rho
    if not np.any(w > 0):
        # Every neighbour was downweighted to zero; fall back to distance only
        w = local
    active = w > 0

    xa = x[active] - x0
    if h > 0:
        xa = xa / h
    ya = y[active]
    sw = np.sqrt(w[active])

    # Not enough distinct abscissae for the requested degree
    d = min(degree, np.unique(xa).size - 1)
    X = np.vander(xa, d + 1, increasing=True)
    beta = lstsq(X * sw[:, None], ya * sw)[0]
    return beta[0]


def loess(x, y, q=None, degree=2, weights=None, predict=None):
    """
    LOESS smoother with support for prediction outside the data.

    For every prediction point the ``q`` observations closest to it are used
    to fit a polynomial of degree ``degree`` by weighted least squares. The
    local weights are the tricube function of the distance scaled by the
    distance to the ``q``-th closest observation, multiplied by the
    (robustness) ``weights`` of each observation.

    Parameters
    ----------
    x : array-like
        Support of the data. Must not contain missing values.
    y : array-like
        Observations at ``x``. ``nan`` marks a missing value; missing
        observations are dropped together with their weights.
    q : int, optional
        Number of neighbours in every local fit (the loess window).
        Defaults to ``round(0.75 * n)`` where ``n`` is the number of
        non-missing observations. When ``q`` exceeds ``n`` the bandwidth is
        enlarged by ``q / n``, which makes the fit approach a global
        polynomial fit as ``q`` grows.
    degree : int, default=2
        Degree of the local polynomial, 0, 1 or 2.
    weights : array-like, optional
        Non-negative weights, one per observation. Defaults to ones.
    predict : array-like, optional
        Points at which the smoother is evaluated. Defaults to ``x``,
        including the points whose ``y`` is missing.

    Returns
    -------
    numpy.ndarray
        Smoothed values at ``predict``.

    Raises
    ------
    ValueError
        If the lengths of ``x``, ``y`` and ``weights`` differ, ``x`` has
        missing values, ``q`` is smaller than 1, ``degree`` is not 0, 1 or 2,
        or ``y`` has no observation.

    Notes
    -----
    When all the observations in a neighbourhood carry zero robustness
    weight, the robustness weights are ignored at that point and the fit
    uses the distance weights alone. When the bandwidth is so narrow that
    no observation gets a positive tricube weight, the observations within
    the bandwidth are fitted with equal weights.

    References
    ----------
    Cleveland, W.S. and Devlin, S.J. (1988) "Locally Weighted Regression: An
    Approach to Regression Analysis by Local Fitting". Journal of the
    American Statistical Association 83(403): 596-610.

    Examples
    --------
    >>> import numpy as np
    >>> from stlsmooth import loess
    >>> x = np.arange(1.0, 11.0)
    >>> y = 2.0 * x + 1.0
    >>> loess(x, y, q=5, degree=1, predict=[0.0, 11.0])
    array([ 1., 23.])
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()

    if len(x) != len(y):
        raise ValueError(f"x and y must have the same length, got {len(x)} and {len(y)}")
    if np.any(np.isnan(x)):
        raise ValueError("x should not contain missing values")
    if degree not in (0, 1, 2):
        raise ValueError(f"degree must be 0, 1 or 2, got {degree}")

    if weights is None:
        rho = np.ones_like(y)
    else:
        rho = np.asarray(weights, dtype=np.float64).ravel()
        if len(rho) != len(y):
            raise ValueError(
                f"weights must have the same length as y, got {len(rho)} and {len(y)}"
            )

    predict = x.copy() if predict is None else np.asarray(predict, dtype=np.float64).ravel()

    present = ~np.isnan(y)
    xv, yv, rv = x[present], y[present], rho[present]
    n = xv.size
    if n == 0:
        raise ValueError("y must contain at least one non-missing observation")

    if q is None:
        q = max(int(round(0.75 * n)), 1)
    if q < 1:
        raise ValueError(f"q must be at least 1, got {q}")
    q = int(q)

    return np.array([_local_fit(xv, yv, rv, x0, q, degree) for x0 in predict])
