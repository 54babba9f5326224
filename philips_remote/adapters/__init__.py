"""Adapter modules for external integrations."""

from .philips import PhilipsTVClient

__all__ = ["PhilipsTVClient"]
