"""Remote control client for the Philips TV JSON API."""

from .version import __version__

__all__ = ["__version__"]
