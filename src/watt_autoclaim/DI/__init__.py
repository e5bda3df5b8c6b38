"""Dependency injection."""

from watt_autoclaim.DI.container import Container

__all__ = ["Container"]
