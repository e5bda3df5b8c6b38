"""Claim execution and claimed-amount reconciliation."""

from watt_autoclaim.services.claim.claim_executor import ClaimExecutor
from watt_autoclaim.services.claim.reconciliation import (
    Reconciliation,
    reconcile_claimed_amount,
    transaction_token_delta,
)

__all__ = [
    "ClaimExecutor",
    "Reconciliation",
    "reconcile_claimed_amount",
    "transaction_token_delta",
]
