"""HTTP, RPC and aggregator clients."""

from watt_autoclaim.clients.aggregator import ISwapAggregator, JupiterClient
from watt_autoclaim.clients.http import AsyncHttpClient
from watt_autoclaim.clients.solana_rpc import SolanaRpcClient

__all__ = [
    "AsyncHttpClient",
    "ISwapAggregator",
    "JupiterClient",
    "SolanaRpcClient",
]
