"""
Pytest configuration and shared fixtures for stlsmooth tests.
"""

import numpy as np
import pytest


@pytest.fixture
def seasonal_series():
    """Monthly series: linear trend, sine seasonality and small noise."""
    np.random.seed(42)
    n = 120  # 10 years of monthly data
    t = np.arange(n)
    trend = 0.01 * t
    seasonal = 2.0 * np.sin(2 * np.pi * t / 12)
    noise = np.random.randn(n) * 0.001
    return trend + seasonal + noise


@pytest.fixture
def noisy_series():
    """Monthly series on a level of 10 with visible noise."""
    np.random.seed(42)
    n = 120
    t = np.arange(n)
    trend = 10 + 0.05 * t
    seasonal = 2.0 * np.sin(2 * np.pi * t / 12)
    noise = np.random.randn(n) * 0.2
    return trend + seasonal + noise


@pytest.fixture
def series_with_outlier(noisy_series):
    """Noisy series with a single large outlier at index 60."""
    y = noisy_series.copy()
    y[60] += 20.0
    return y


@pytest.fixture
def series_with_missing(noisy_series):
    """Noisy series with a contiguous block and scattered missing values."""
    y = noisy_series.copy()
    y[30:35] = np.nan
    y[[3, 50, 77, 101, 119]] = np.nan
    return y


@pytest.fixture
def short_series():
    """Two seasons of quarterly-like data with period 4."""
    return np.array([10.0, 14.0, 8.0, 12.0, 11.0, 15.0, 9.0, 13.0])


@pytest.fixture
def airpassengers():
    """Classic AirPassengers dataset (monthly airline passengers 1949-1960)."""
    # First 48 values of the classic dataset
    return np.array([
        112, 118, 132, 129, 121, 135, 148, 148, 136, 119, 104, 118,
        115, 126, 141, 135, 125, 149, 170, 170, 158, 133, 114, 140,
        145, 150, 178, 163, 172, 178, 199, 199, 184, 162, 146, 166,
        171, 180, 193, 181, 183, 218, 230, 242, 209, 191, 172, 194
    ], dtype=float)
