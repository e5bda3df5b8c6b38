# -*- coding: utf-8 -*-
"""Domain models."""

from watt_autoclaim.models.claim_outcome import AmountSource, ClaimOutcome
from watt_autoclaim.models.run_report import RunReport, RunStatus
from watt_autoclaim.models.sell_decision import SellDecision, SkipReason
from watt_autoclaim.models.swap_quote import QuoteAlreadyUsedError, SwapQuote
from watt_autoclaim.models.swap_result import SwapResult

__all__ = [
    "AmountSource",
    "ClaimOutcome",
    "QuoteAlreadyUsedError",
    "RunReport",
    "RunStatus",
    "SellDecision",
    "SkipReason",
    "SwapQuote",
    "SwapResult",
]
