"""HTTP API for diffguard."""

from .. import __version__

__all__ = ["__version__"]
