import warnings

import numpy as np
from joblib import Parallel, delayed

from stlsmooth.core.checker import check_stl_parameters
from stlsmooth.core.result import STLResult
from stlsmooth.core.state import LoopStatus, STLState
from stlsmooth.core.utils import (
    centered_support,
    convergence_ratio,
    is_converged,
    noise_floor,
    robustness_weights,
)
from stlsmooth.loess import loess
from stlsmooth.sma import triple_moving_average


def _smooth_phase(detrended, weights, phase, period, ns):
    """Loess of one cycle-subseries, extended by one period on both sides."""
    n = detrended.size
    support = np.arange(phase + 1, n + 1, period, dtype=float)
    predict = np.arange(phase + 1 - period, n + period + 1, period, dtype=float)
    return loess(
        support,
        detrended[phase::period],
        q=ns,
        degree=1,
        weights=weights[phase::period],
        predict=predict,
    )


def cycle_subseries(detrended, weights, period, ns, n_jobs=1):
    """
    Smooth every cycle-subseries and collect the results in a padded buffer.

    Parameters
    ----------
    detrended : numpy.ndarray
        ``y - trend``, ``nan`` where ``y`` is missing.
    weights : numpy.ndarray
        Robustness weights.
    period : int
        Seasonal period.
    ns : int
        Seasonal loess window.
    n_jobs : int, default=1
        Workers for the per-phase fits. Phases are independent.

    Returns
    -------
    numpy.ndarray
        Buffer of length ``n + 2 * period``: the smoothed subseries with one
        extra period of backcast before and forecast after the data.
    """
    n = detrended.size
    if n_jobs == 1:
        smoothed = [
            _smooth_phase(detrended, weights, phase, period, ns)
            for phase in range(period)
        ]
    else:
        smoothed = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(_smooth_phase)(detrended, weights, phase, period, ns)
            for phase in range(period)
        )

    buffer = np.empty(n + 2 * period)
    for phase, values in enumerate(smoothed):
        buffer[phase::period] = values
    return buffer


def low_pass(buffer, weights, period, nl):
    """Moving averages of length period, period, 3 followed by a loess of window nl."""
    n = buffer.size - 2 * period
    return loess(
        centered_support(n, "ceil"),
        triple_moving_average(buffer, period),
        q=nl,
        degree=1,
        weights=weights,
    )


def inner_cycle(y, state, config, outer=0, inner=0):
    """
    One pass of the STL inner loop.

    Parameters
    ----------
    y : numpy.ndarray
        The series, ``nan`` where missing.
    state : STLState
        State before the pass.
    config : STLConfig
        Resolved configuration.
    outer, inner : int
        Loop indices, only used in verbose output.

    Returns
    -------
    STLState
        State after the pass, with updated seasonal and trend components
        and convergence flags. The weights are passed through unchanged.
    """
    n = y.size
    cth = config.convergence_threshold
    atol = noise_floor(y)

    # Detrending
    detrended = y - state.trend
    seasonal_ratio = convergence_ratio(detrended, state.seasonal_prev, atol)
    if config.verbose:
        print(f"Outer loop: {outer} - Inner loop: {inner}")
        print(f"Seasonal Convergence: {seasonal_ratio}")

    # Cycle-subseries smoothing and low-pass filtering
    buffer = cycle_subseries(
        detrended, state.weights, config.period, config.ns, config.n_jobs
    )
    low = low_pass(buffer, state.weights, config.period, config.nl)
    seasonal = buffer[config.period : config.period + n] - low

    # Deseasonalizing and trend smoothing
    deseasonalized = y - seasonal
    trend = loess(
        centered_support(n, "floor"),
        deseasonalized,
        q=config.nt,
        degree=1,
        weights=state.weights,
    )
    trend_ratio = convergence_ratio(trend, state.trend_prev, atol)
    if config.verbose:
        print(f"Trend    Convergence: {trend_ratio}\n")

    return state.evolve(
        seasonal=seasonal,
        trend=trend,
        seasonal_prev=detrended,
        trend_prev=trend,
        seasonal_converged=is_converged(seasonal_ratio, cth),
        trend_converged=is_converged(trend_ratio, cth),
        seasonal_ratio=seasonal_ratio,
        trend_ratio=trend_ratio,
    )


def inner_loop(y, state, config, outer=0):
    """Run up to ``config.ni`` inner cycles, stopping once both components converge."""
    for inner in range(1, config.ni + 1):
        state = inner_cycle(y, state, config, outer=outer, inner=inner)
        if state.converged:
            break
    return state


def outer_status(config, state, cycle):
    """
    Termination predicate of the outer loop.

    Robust mode stops on convergence of both components (or at
    ``max_outer``). Fixed-cycle mode ignores convergence and stops after
    cycle ``no``.
    """
    if config.robust:
        if state.converged:
            return LoopStatus.CONVERGED
        if cycle + 1 >= config.max_outer:
            return LoopStatus.BUDGET_EXHAUSTED
        return LoopStatus.RUNNING
    if cycle >= config.no:
        return LoopStatus.BUDGET_EXHAUSTED
    return LoopStatus.RUNNING


def _updates_weights(config, cycle):
    return cycle > 0 and (config.no is None or cycle <= config.no)


def decompose(y, config):
    """
    STL decomposition of a validated series with a resolved configuration.

    Parameters
    ----------
    y : numpy.ndarray
        One-dimensional float array, ``nan`` where missing.
    config : STLConfig
        Configuration from :func:`check_stl_parameters`.

    Returns
    -------
    STLResult
    """
    state = STLState.initial(y.size)
    status = LoopStatus.RUNNING
    atol = noise_floor(y)
    cycle = 0

    while status is LoopStatus.RUNNING:
        state = inner_loop(y, state, config, outer=cycle)
        # Trend and seasonal are defined everywhere, the remainder is not
        remainder = y - state.trend - state.seasonal

        status = outer_status(config, state, cycle)
        if status is LoopStatus.CONVERGED:
            if config.verbose:
                print(
                    f"Convergence achieved (< {config.convergence_threshold}); "
                    "Stopping computation..."
                )
            break

        if _updates_weights(config, cycle):
            state = state.evolve(weights=robustness_weights(remainder, atol))
        cycle += 1

    seasonal = state.seasonal
    if config.seasonal_post_smooth:
        seasonal = loess(
            centered_support(y.size, "ceil"), seasonal, q=config.post_smooth_window
        )
        remainder = y - state.trend - seasonal

    if not state.seasonal_converged:
        warnings.warn(
            f"Seasonal convergence not achieved (>= {config.convergence_threshold}). "
            "Consider a robust estimation.",
            RuntimeWarning,
            stacklevel=2,
        )
    if not state.trend_converged:
        warnings.warn(
            f"Trend convergence not achieved (>= {config.convergence_threshold}). "
            "Consider a robust estimation.",
            RuntimeWarning,
            stacklevel=2,
        )

    return STLResult(
        seasonal=seasonal,
        trend=state.trend,
        remainder=remainder,
        weights=state.weights,
        seasonal_converged=state.seasonal_converged,
        trend_converged=state.trend_converged,
        status=status,
        outer_cycles=cycle + 1 if status is LoopStatus.CONVERGED else cycle,
        config=config,
    )


def stl_array(
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
    """Validate the arguments and run :func:`decompose` on a plain array."""
    y, config = check_stl_parameters(
        y,
        period,
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
    return decompose(y, config)
