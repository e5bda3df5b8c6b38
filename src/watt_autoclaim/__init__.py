"""WATT auto-claim: claim staking rewards on Solana and optionally sell them via Jupiter."""

from watt_autoclaim.clients import AsyncHttpClient, JupiterClient, SolanaRpcClient
from watt_autoclaim.config import get_settings
from watt_autoclaim.DI import Container
from watt_autoclaim.services import ClaimAndSellOrchestrator

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "ClaimAndSellOrchestrator",
    "Container",
    "JupiterClient",
    "SolanaRpcClient",
    "get_settings",
]
