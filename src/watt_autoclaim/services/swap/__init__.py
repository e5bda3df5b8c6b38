"""Swap execution."""

from watt_autoclaim.services.swap.swap_executor import SwapExecutor

__all__ = ["SwapExecutor"]
