"""SwapResult: a confirmed liquidation of part of a claim."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class SwapResult:
    """Confirmed swap: WATT sold, expected output, and what stayed in the wallet."""

    signature: str
    input_amount: Decimal
    output_amount: Decimal
    """Expected output from the quote (human units of output_token)."""
    output_token: str
    kept_amount: Decimal
