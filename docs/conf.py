# Sphinx configuration for the stlsmooth documentation.
import importlib.metadata
import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

project = "stlsmooth"
author = "stlsmooth developers"
copyright = f"2026, {author}"
try:
    release = importlib.metadata.version("stlsmooth")
except importlib.metadata.PackageNotFoundError:
    release = "0.1.0"
version = ".".join(release.split(".")[:2])

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]

# Docstrings are numpy style throughout
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_rtype = False

autosummary_generate = True
autodoc_member_order = "bysource"
autodoc_default_options = {
    "members": True,
    "exclude-members": "__weakref__, __dict__, __module__, __init__",
}
autoclass_content = "class"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable", None),
    "scipy": ("https://docs.scipy.org/doc/scipy", None),
    "pandas": ("https://pandas.pydata.org/docs", None),
}

exclude_patterns = ["_build"]
html_theme = "sphinx_rtd_theme"
html_title = f"stlsmooth {release}"
