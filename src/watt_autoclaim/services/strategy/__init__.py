"""Strategy policies: SellPolicy (pure logic, no I/O)."""

from watt_autoclaim.services.strategy.sell_policy import SellPolicy

__all__ = ["SellPolicy"]
