"""Environment report to attach to bug reports."""

import importlib.metadata
import platform

#: Distributions listed by :func:`show_versions` and what they are used for.
DEPENDENCIES = {
    "numpy": "arrays and missing values",
    "scipy": "weighted least squares of the loess fits",
    "pandas": "time-indexed series",
    "joblib": "parallel cycle-subseries smoothing",
    "statsmodels": "reference STL in the test suite",
}


def _version(distribution):
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        return None


def versions():
    """
    Versions of Python, stlsmooth and its dependencies.

    Returns
    -------
    dict
        Name to version string, ``None`` for a distribution that is not
        installed.
    """
    info = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "stlsmooth": _version("stlsmooth"),
    }
    info.update({name: _version(name) for name in DEPENDENCIES})
    return info


def show_versions():
    """Print :func:`versions` as an aligned table."""
    info = versions()
    width = max(len(name) for name in info)
    print("\nstlsmooth environment:")
    for name, version in info.items():
        print(f"  {name:<{width}} : {version or 'not installed'}")
