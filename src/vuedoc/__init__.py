"""Top-level package for :mod:`vuedoc` documentation extraction.

The package exposes version metadata so downstream tooling can surface the
installed build.

Example:
    >>> from vuedoc import __version__
    >>> __version__.split(".")[0]
    '0'
"""

from importlib import metadata

try:
    __version__ = metadata.version("vuedoc")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
