"""Token balance reads."""

from watt_autoclaim.services.balance.balance_oracle import BalanceOracle

__all__ = ["BalanceOracle"]
