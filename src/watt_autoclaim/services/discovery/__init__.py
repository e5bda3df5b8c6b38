"""State account discovery."""

from watt_autoclaim.services.discovery.account_locator import IAccountLocator, RpcAccountLocator

__all__ = ["IAccountLocator", "RpcAccountLocator"]
