"""Turn changed specification files into templated GitHub issues."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("specops")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
