"""
Unit tests for the stl function.

Tests cover:
- Output format and additivity of the components
- Recovery of a known trend and seasonal pattern
- Missing values
- Robust estimation and robustness weights
- Termination of the outer loop
- Seasonal post-smoothing, verbose output and parallel smoothing
"""

import warnings

import numpy as np
import pytest

from stlsmooth import LoopStatus, STLResult, stl


@pytest.fixture(autouse=True)
def _ignore_convergence_warnings():
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*convergence not achieved.*")
        yield


def assert_additive(y, result):
    present = ~np.isnan(y)
    np.testing.assert_allclose(
        (result.seasonal + result.trend + result.remainder)[present],
        y[present],
        atol=1e-10,
    )


class TestStlBasic:
    """Basic functionality tests for stl."""

    def test_import(self):
        """Test that stl can be imported from stlsmooth."""
        from stlsmooth import stl
        assert callable(stl)

    def test_output_format(self, seasonal_series):
        result = stl(seasonal_series, 12)

        assert isinstance(result, STLResult)
        n = len(seasonal_series)
        assert len(result) == n
        assert result.seasonal.shape == (n,)
        assert result.trend.shape == (n,)
        assert result.remainder.shape == (n,)
        assert result.weights.shape == (n,)

    def test_additivity(self, noisy_series):
        result = stl(noisy_series, 12, ns=7)

        assert_additive(noisy_series, result)

    def test_additivity_robust(self, series_with_outlier):
        result = stl(series_with_outlier, 12, ns=7, robust=True)

        assert_additive(series_with_outlier, result)

    def test_fitted_is_seasonal_plus_trend(self, noisy_series):
        result = stl(noisy_series, 12, ns=7)

        np.testing.assert_allclose(result.fitted, result.seasonal + result.trend)

    def test_accepts_lists(self, short_series):
        result = stl(list(short_series), 4)

        assert len(result) == len(short_series)
        assert_additive(short_series, result)

    def test_odd_length_and_odd_period(self):
        np.random.seed(3)
        t = np.arange(77)
        y = 5 + 0.02 * t + np.cos(2 * np.pi * t / 7) + np.random.randn(77) * 0.05

        result = stl(y, 7, ns=9)

        assert np.all(np.isfinite(result.seasonal))
        assert np.all(np.isfinite(result.trend))
        assert_additive(y, result)

    def test_airpassengers(self, airpassengers):
        result = stl(airpassengers, 12, ns=7, robust=True)

        # Summer peak
        assert np.argmax(result.seasonal[:12]) in (6, 7)
        assert result.trend[-1] > result.trend[0]


class TestStlRecovery:
    """Recovery of known components."""

    def test_seasonal_amplitude(self, seasonal_series):
        result = stl(seasonal_series, 12)

        amplitude = (result.seasonal.max() - result.seasonal.min()) / 2
        assert abs(amplitude - 2.0) < 0.2

    def test_trend_increasing(self, seasonal_series):
        result = stl(seasonal_series, 12)

        assert np.all(np.diff(result.trend) > 0)

    def test_components_close_to_truth(self, seasonal_series):
        t = np.arange(len(seasonal_series))

        result = stl(seasonal_series, 12)

        np.testing.assert_allclose(result.trend, 0.01 * t, atol=0.05)
        np.testing.assert_allclose(
            result.seasonal, 2.0 * np.sin(2 * np.pi * t / 12), atol=0.05
        )

    def test_redecomposition_is_fixed_point(self):
        np.random.seed(7)
        t = np.arange(120)
        y = 10 + 0.05 * t + 2.0 * np.sin(2 * np.pi * t / 12) + np.random.randn(120) * 0.05
        first = stl(y, 12)

        second = stl(first.seasonal + first.trend, 12)

        np.testing.assert_allclose(second.seasonal, first.seasonal, atol=0.1)
        np.testing.assert_allclose(second.trend, first.trend, atol=0.1)
        np.testing.assert_allclose(second.remainder, 0.0, atol=0.1)


class TestStlMissingValues:
    """Series with missing observations."""

    def test_components_defined_everywhere(self, series_with_missing):
        result = stl(series_with_missing, 12, ns=7)

        assert np.all(np.isfinite(result.seasonal))
        assert np.all(np.isfinite(result.trend))

    def test_remainder_missing_where_input_missing(self, series_with_missing):
        result = stl(series_with_missing, 12, ns=7)

        np.testing.assert_array_equal(
            np.isnan(result.remainder), np.isnan(series_with_missing)
        )
        assert_additive(series_with_missing, result)

    def test_robust_with_missing(self, series_with_missing):
        result = stl(series_with_missing, 12, ns=7, robust=True)

        assert np.all(np.isfinite(result.seasonal))
        assert np.all(np.isfinite(result.trend))
        # Missing observations carry no weight once weights are updated
        assert np.all(result.weights[np.isnan(series_with_missing)] == 0)

    def test_none_values(self, short_series):
        y = list(short_series)
        y[2] = None

        result = stl(y, 4)

        assert np.isnan(result.remainder[2])
        assert np.isfinite(result.seasonal[2])


class TestStlRobust:
    """Robust estimation."""

    def test_outlier_downweighted(self, series_with_outlier):
        result = stl(series_with_outlier, 12, ns=7, robust=True)

        assert result.weights[60] < result.weights[59]
        assert result.weights[60] < result.weights[61]
        assert result.weights[60] < 0.1
        assert np.median(result.weights) > 0.5

    def test_robust_trend_ignores_outlier(self, series_with_outlier):
        plain = stl(series_with_outlier, 12, ns=7)
        robust = stl(series_with_outlier, 12, ns=7, robust=True)

        truth = 10 + 0.05 * 60
        assert abs(robust.trend[60] - truth) < abs(plain.trend[60] - truth)

    def test_robust_converges(self, noisy_series):
        result = stl(noisy_series, 12, ns=7, robust=True)

        assert result.status is LoopStatus.CONVERGED
        assert result.seasonal_converged
        assert result.trend_converged

    def test_max_outer_caps_robust_mode(self, noisy_series):
        result = stl(
            noisy_series, 12, ns=7, robust=True,
            convergence_threshold=1e-12, max_outer=3,
        )

        assert result.status is LoopStatus.BUDGET_EXHAUSTED
        assert result.outer_cycles == 3

    def test_fixed_outer_cycles_update_weights(self, series_with_outlier):
        result = stl(series_with_outlier, 12, ns=7, no=1)

        assert result.outer_cycles == 2
        assert result.weights[60] < 0.1

    def test_no_weight_update_by_default(self, series_with_outlier):
        result = stl(series_with_outlier, 12, ns=7)

        np.testing.assert_array_equal(result.weights, 1.0)


class TestStlTermination:
    """Outer loop termination and convergence warnings."""

    def test_non_robust_runs_single_pass(self, noisy_series):
        result = stl(noisy_series, 12, ns=7)

        assert result.status is LoopStatus.BUDGET_EXHAUSTED
        assert result.outer_cycles == 1

    def test_non_robust_ignores_convergence(self, noisy_series):
        result = stl(noisy_series, 12, ns=7, no=3, convergence_threshold=10.0)

        # Converged from the second inner cycle on but still runs no + 1 passes
        assert result.converged
        assert result.status is LoopStatus.BUDGET_EXHAUSTED
        assert result.outer_cycles == 4

    def test_constant_series_converges(self):
        result = stl(np.full(24, 5.0), 4, robust=True)

        assert result.status is LoopStatus.CONVERGED
        assert result.outer_cycles == 3
        np.testing.assert_array_equal(result.weights, np.ones(24))
        np.testing.assert_allclose(result.trend, 5.0)
        np.testing.assert_allclose(result.seasonal, 0.0, atol=1e-10)

    def test_warns_when_not_converged(self, noisy_series):
        with warnings.catch_warnings():
            warnings.simplefilter("always")
            with pytest.warns(RuntimeWarning, match="Seasonal convergence not achieved"):
                result = stl(noisy_series, 12, ns=7)

        assert not result.seasonal_converged

    def test_warnings_are_independent(self, noisy_series):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = stl(noisy_series, 12, ns=7, ni=1)

        messages = [str(w.message) for w in caught if w.category is RuntimeWarning]
        assert not result.trend_converged
        assert any(m.startswith("Seasonal convergence") for m in messages)
        assert any(m.startswith("Trend convergence") for m in messages)


class TestStlOptions:
    """Post-smoothing, verbose output and parallel smoothing."""

    def test_seasonal_post_smooth(self, noisy_series):
        plain = stl(noisy_series, 12, ns=7)
        smoothed = stl(
            noisy_series, 12, ns=7, seasonal_post_smooth=True, post_smooth_window=5
        )

        assert not np.allclose(plain.seasonal, smoothed.seasonal)
        np.testing.assert_allclose(plain.trend, smoothed.trend)
        assert_additive(noisy_series, smoothed)

    @pytest.mark.parametrize("window", [None, 3, 4])
    def test_short_post_smooth_window_keeps_seasonal(self, noisy_series, window):
        plain = stl(noisy_series, 12, ns=7)
        smoothed = stl(
            noisy_series, 12, ns=7, seasonal_post_smooth=True, post_smooth_window=window
        )

        # The window-th neighbour gets zero weight, leaving exact quadratic fits
        np.testing.assert_allclose(smoothed.seasonal, plain.seasonal, atol=1e-10)
        np.testing.assert_allclose(smoothed.remainder, plain.remainder, atol=1e-10)

    def test_verbose_output(self, noisy_series, capsys):
        stl(noisy_series, 12, ns=7, robust=True, verbose=True)

        out = capsys.readouterr().out
        assert "Outer loop: 0 - Inner loop: 1" in out
        assert "Seasonal Convergence:" in out
        assert "Trend    Convergence:" in out
        assert "Convergence achieved" in out

    def test_silent_by_default(self, noisy_series, capsys):
        stl(noisy_series, 12, ns=7)

        assert capsys.readouterr().out == ""

    def test_parallel_matches_serial(self, series_with_missing):
        serial = stl(series_with_missing, 12, ns=7, robust=True)
        parallel = stl(series_with_missing, 12, ns=7, robust=True, n_jobs=2)

        np.testing.assert_allclose(parallel.seasonal, serial.seasonal)
        np.testing.assert_allclose(parallel.trend, serial.trend)
        np.testing.assert_allclose(parallel.weights, serial.weights)


class TestStlReference:
    """Agreement with the statsmodels implementation."""

    def test_matches_statsmodels(self, noisy_series):
        seasonal_module = pytest.importorskip("statsmodels.tsa.seasonal")

        ours = stl(noisy_series, 12, ns=7, nt=23, nl=13)
        theirs = seasonal_module.STL(
            noisy_series,
            period=12,
            seasonal=7,
            trend=23,
            low_pass=13,
            seasonal_deg=1,
            trend_deg=1,
            low_pass_deg=1,
            seasonal_jump=1,
            trend_jump=1,
            low_pass_jump=1,
            robust=False,
        ).fit(inner_iter=2, outer_iter=0)

        assert np.corrcoef(ours.trend, theirs.trend)[0, 1] > 0.99
        assert np.corrcoef(ours.seasonal, theirs.seasonal)[0, 1] > 0.95
