"""Claimed-amount reconciliation (pure, no I/O).

Two independent signals measure a claim: the token balance delta recorded in
the transaction metadata, and the wallet balance delta around the claim. The
transaction delta wins whenever it is positive.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from watt_autoclaim.models.claim_outcome import AmountSource

if TYPE_CHECKING:
    from watt_autoclaim.clients.solana_rpc.schema import TokenBalanceSchema, TransactionSchema


@dataclass(frozen=True)
class Reconciliation:
    """Reconciled claimed amount and the signal it came from."""

    amount: Decimal | None
    source: AmountSource


def _ui_amount(entry: "TokenBalanceSchema") -> Decimal | None:
    ui = entry.get("uiTokenAmount") or {}
    ui_string = ui.get("uiAmountString")
    if ui_string is not None:
        return Decimal(str(ui_string))
    amount = ui.get("amount")
    decimals = ui.get("decimals")
    if amount is None or decimals is None:
        return None
    return Decimal(int(amount)) / (Decimal(10) ** int(decimals))


def transaction_token_delta(
    transaction: "TransactionSchema | None",
    owner: str,
    mint: str,
) -> Decimal | None:
    """Return the first positive post-minus-pre balance change for (owner, mint).

    Pre and post entries are matched by accountIndex. Returns None when the
    transaction or its metadata is missing or no matching entry increased.
    """
    if not transaction:
        return None
    meta = transaction.get("meta")
    if not meta:
        return None
    pre_balances = meta.get("preTokenBalances") or []
    post_balances = meta.get("postTokenBalances") or []
    pre_by_index = {p.get("accountIndex"): p for p in pre_balances}
    for post in post_balances:
        if post.get("owner") != owner or post.get("mint") != mint:
            continue
        pre = pre_by_index.get(post.get("accountIndex"))
        if pre is None:
            continue
        post_amount = _ui_amount(post)
        pre_amount = _ui_amount(pre)
        if post_amount is None or pre_amount is None:
            continue
        change = post_amount - pre_amount
        if change > 0:
            return change
    return None


def reconcile_claimed_amount(
    transaction_delta: Decimal | None,
    balance_delta: Decimal | None,
) -> Reconciliation:
    """Pick the claimed amount from the two signals.

    1. Positive transaction delta, used verbatim.
    2. Otherwise a positive wallet balance delta.
    3. Otherwise undetermined (None).
    """
    if transaction_delta is not None and transaction_delta > 0:
        return Reconciliation(amount=transaction_delta, source=AmountSource.TRANSACTION)
    if balance_delta is not None and balance_delta > 0:
        return Reconciliation(amount=balance_delta, source=AmountSource.BALANCE_DELTA)
    return Reconciliation(amount=None, source=AmountSource.UNDETERMINED)
