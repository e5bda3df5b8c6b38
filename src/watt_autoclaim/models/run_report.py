# -*- coding: utf-8 -*-
"""RunReport: final outcome of one claim-and-sell run."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from watt_autoclaim.models.claim_outcome import ClaimOutcome
from watt_autoclaim.models.sell_decision import SellDecision
from watt_autoclaim.models.swap_result import SwapResult


class RunStatus(str, Enum):
    """Where the run ended."""

    DRY_RUN = "dry_run"
    BELOW_THRESHOLD = "below_threshold"
    """Claimed (or undetermined) amount under CLAIM__MIN_CLAIMABLE; nothing to sell."""
    CLAIMED = "claimed"
    """Claim done, auto-sell disabled."""
    SELL_SKIPPED = "sell_skipped"
    SOLD = "sold"
    SELL_FAILED = "sell_failed"
    """Claim done, sell stage failed (price unavailable or swap rejected)."""


_FAILED_STATUSES = frozenset({RunStatus.SELL_FAILED})


@dataclass(frozen=True, slots=True)
class RunReport:
    """Everything a run observed, for the final log line and the exit code."""

    status: RunStatus
    dry_run: bool
    state_account: str
    balance_before: Decimal
    claim: ClaimOutcome | None = None
    sell_decision: SellDecision | None = None
    swap: SwapResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status not in _FAILED_STATUSES

    def with_status(self, status: RunStatus, **changes: object) -> RunReport:
        """Return a copy with a new status and optional field changes."""
        return replace(self, status=status, **changes)  # type: ignore[arg-type]
