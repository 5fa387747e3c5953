"""Financial computation and verdict engine.

Pure calculators for auto, housing and gig income affordability plus the
Pro Report assembler. This module also exposes the package version."""

from importlib import metadata

__all__ = ["__version__"]

try:
    __version__ = metadata.version("autolytiq")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"
