"""Solana JSON-RPC response types (keys match the RPC response, camelCase)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypedDict


class ProgramAccountSchema(TypedDict, total=False):
    """getProgramAccounts item."""

    pubkey: str
    account: dict[str, Any]


class SignatureStatusSchema(TypedDict, total=False):
    """getSignatureStatuses value item."""

    slot: int
    confirmations: int | None
    err: Any
    confirmationStatus: Literal["processed", "confirmed", "finalized"] | None


class UiTokenAmountSchema(TypedDict, total=False):
    amount: str
    decimals: int
    uiAmount: float | None
    uiAmountString: str


class TokenBalanceSchema(TypedDict, total=False):
    """Entry of meta.preTokenBalances / meta.postTokenBalances."""

    accountIndex: int
    mint: str
    owner: str
    programId: str
    uiTokenAmount: UiTokenAmountSchema


class TransactionMetaSchema(TypedDict, total=False):
    err: Any
    fee: int
    preTokenBalances: list[TokenBalanceSchema]
    postTokenBalances: list[TokenBalanceSchema]
    logMessages: list[str]


class TransactionSchema(TypedDict, total=False):
    """getTransaction result."""

    slot: int
    blockTime: int | None
    meta: TransactionMetaSchema | None
    transaction: Any


@dataclass(frozen=True)
class LatestBlockhash:
    """getLatestBlockhash value."""

    blockhash: str
    last_valid_block_height: int
