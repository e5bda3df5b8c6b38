# -*- coding: utf-8 -*-
"""SellPolicy: pure logic to decide how much of a claim to sell.

No I/O. Receives the claimed amount, the SELL__* settings and the price
looked up by the orchestrator. Invalid configuration is an error, never
clamped; a missing price fails closed unless the minimum-price gate is 0.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from watt_autoclaim.config.config import validate_sell_settings
from watt_autoclaim.constants import DUST_THRESHOLD
from watt_autoclaim.exceptions import OracleUnavailableError
from watt_autoclaim.models.sell_decision import SellDecision, SkipReason

if TYPE_CHECKING:
    from watt_autoclaim.config import SellSettings


class SellPolicy:
    """Pure policy: sizes the sell and applies percentage, dust and price gates."""

    def __init__(self, dust_threshold: Decimal = DUST_THRESHOLD) -> None:
        self._dust_threshold = dust_threshold

    def size(self, claimed_amount: Decimal, settings: "SellSettings") -> SellDecision:
        """Split the claim into sell / keep before any price is known.

        Checks (in order):
        1. Percentage within [0, 100] and a supported output token (else ConfigurationError).
        2. amount_to_sell = claimed * pct / 100, amount_to_keep = claimed - amount_to_sell.
        3. Skip when pct is 0 or amount_to_sell is below the dust threshold.

        Args:
            claimed_amount: Reconciled claimed WATT (>= 0).
            settings: SellSettings (SELL__*).

        Returns:
            SellDecision; should_sell is False when a skip rule fired.

        Raises:
            ConfigurationError: On an invalid percentage or output token.
        """
        validate_sell_settings(settings)
        token = settings.token.upper()

        if settings.percentage == 0:
            return SellDecision.skip(claimed_amount, token, SkipReason.ZERO_PERCENTAGE)

        amount_to_sell = claimed_amount * settings.percentage / Decimal(100)
        if amount_to_sell < self._dust_threshold:
            return SellDecision.skip(claimed_amount, token, SkipReason.BELOW_DUST)

        return SellDecision(
            amount_to_sell=amount_to_sell,
            amount_to_keep=claimed_amount - amount_to_sell,
            output_token=token,
        )

    def decide(
        self,
        claimed_amount: Decimal,
        settings: "SellSettings",
        current_price_usd: Decimal | None,
    ) -> SellDecision:
        """Full decision: sizing plus the price gates.

        After size():
        4. No price: OracleUnavailableError unless min_price_usd is 0, in which
           case the sell proceeds unverified.
        5. Skip when min_price_usd > 0 and the price is below it.

        A price of exactly 0 is the oracle's "unverified" sentinel.

        Raises:
            ConfigurationError: On an invalid percentage or output token.
            OracleUnavailableError: When the price is required but missing.
        """
        sized = self.size(claimed_amount, settings)
        if not sized.should_sell:
            return sized

        gate = settings.min_price_usd
        if current_price_usd is None and gate > 0:
            raise OracleUnavailableError(
                "Could not fetch WATT price and SELL__MIN_PRICE_USD is set. Aborting auto-sell."
            )

        verified = current_price_usd is not None and current_price_usd > 0
        if gate > 0 and current_price_usd is not None and current_price_usd < gate:
            return SellDecision.skip(
                claimed_amount,
                sized.output_token,
                SkipReason.BELOW_MIN_PRICE,
                price_usd=current_price_usd,
            )

        return SellDecision(
            amount_to_sell=sized.amount_to_sell,
            amount_to_keep=sized.amount_to_keep,
            output_token=sized.output_token,
            price_usd=current_price_usd,
            price_verified=verified,
        )
