"""Solana JSON-RPC client."""

from watt_autoclaim.clients.solana_rpc.schema import (
    LatestBlockhash,
    ProgramAccountSchema,
    SignatureStatusSchema,
    TokenBalanceSchema,
    TransactionSchema,
)
from watt_autoclaim.clients.solana_rpc.solana_rpc import SolanaRpcClient

__all__ = [
    "LatestBlockhash",
    "ProgramAccountSchema",
    "SignatureStatusSchema",
    "SolanaRpcClient",
    "TokenBalanceSchema",
    "TransactionSchema",
]
