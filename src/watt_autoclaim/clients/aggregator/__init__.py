"""Swap aggregator clients."""

from watt_autoclaim.clients.aggregator.base import ISwapAggregator
from watt_autoclaim.clients.aggregator.jupiter import JupiterClient

__all__ = ["ISwapAggregator", "JupiterClient"]
