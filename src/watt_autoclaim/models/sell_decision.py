# -*- coding: utf-8 -*-
"""SellDecision: how much of a claim to sell, how much to keep, or why nothing is sold."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class SkipReason(str, Enum):
    """Why a sell decision sells nothing."""

    ZERO_PERCENTAGE = "zero_percentage"
    BELOW_DUST = "below_dust"
    BELOW_MIN_PRICE = "below_min_price"


@dataclass(frozen=True, slots=True)
class SellDecision:
    """Outcome of SellPolicy.

    Invariants: amount_to_sell + amount_to_keep equals the claimed amount;
    amount_to_sell is zero exactly when skip_reason is set.
    """

    amount_to_sell: Decimal
    amount_to_keep: Decimal
    output_token: str
    skip_reason: SkipReason | None = None
    price_usd: Decimal | None = None
    """WATT price used for the gate; None when the decision was made before pricing."""
    price_verified: bool = False
    """False when the price lookup failed and the zero minimum-price gate let the sell proceed."""

    @property
    def should_sell(self) -> bool:
        return self.skip_reason is None

    @property
    def total(self) -> Decimal:
        return self.amount_to_sell + self.amount_to_keep

    @classmethod
    def skip(
        cls,
        claimed_amount: Decimal,
        output_token: str,
        reason: SkipReason,
        *,
        price_usd: Decimal | None = None,
    ) -> SellDecision:
        """Keep everything."""
        return cls(
            amount_to_sell=Decimal("0"),
            amount_to_keep=claimed_amount,
            output_token=output_token,
            skip_reason=reason,
            price_usd=price_usd,
        )
