# -*- coding: utf-8 -*-
"""ClaimOutcome: result of one confirmed claim transaction.

Created once per successful submission and never mutated. The claimed amount
is measured after confirmation and may be unknown; a negative measurement is
stored as unknown, never as a claim.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum


class AmountSource(str, Enum):
    """Which signal produced the claimed amount."""

    TRANSACTION = "transaction"
    """Token balance delta recorded in the transaction metadata."""
    BALANCE_DELTA = "balance_delta"
    """Wallet balance after the claim minus the balance read before it."""
    UNDETERMINED = "undetermined"


@dataclass(frozen=True, slots=True)
class ClaimOutcome:
    """Confirmed claim: signature, measured amount (or None) and when it was recorded."""

    signature: str
    claimed_amount: Decimal | None
    amount_source: AmountSource
    timestamp: datetime

    @classmethod
    def create(
        cls,
        signature: str,
        claimed_amount: Decimal | None,
        amount_source: AmountSource,
        *,
        timestamp: datetime | None = None,
    ) -> ClaimOutcome:
        """Create a ClaimOutcome, normalizing negative amounts to undetermined."""
        signature = signature.strip()
        if not signature:
            raise ValueError("signature must be non-empty")
        if claimed_amount is None or claimed_amount < 0:
            claimed_amount = None
            amount_source = AmountSource.UNDETERMINED
        return cls(
            signature=signature,
            claimed_amount=claimed_amount,
            amount_source=amount_source,
            timestamp=timestamp or datetime.now(UTC),
        )

    @property
    def amount_determined(self) -> bool:
        return self.claimed_amount is not None
