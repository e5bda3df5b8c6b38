# -*- coding: utf-8 -*-
"""PriceOracle: USD value of one WATT from aggregator quotes.

Primary route quotes WATT -> USDC directly. When that fails (typically no
direct liquidity) the price is composed from WATT -> SOL and SOL -> USDC.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from watt_autoclaim.constants import PRICE_PROBE_SLIPPAGE_BPS, TOKEN_DECIMALS, TOKEN_MINTS
from watt_autoclaim.exceptions import ApiRequestError
from watt_autoclaim.utils.validation import from_raw_amount

if TYPE_CHECKING:
    from watt_autoclaim.clients.aggregator import ISwapAggregator
    from watt_autoclaim.config import SellSettings

UNVERIFIED_PRICE = Decimal("0")


class PriceOracle:
    """Derives the WATT/USD price from quotes; never executes them."""

    def __init__(
        self,
        aggregator: "ISwapAggregator",
        sell_settings: "SellSettings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the oracle.

        Args:
            aggregator: Quote source.
            sell_settings: SELL__* settings (min_price_usd decides the no-price carve-out).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._aggregator = aggregator
        self._sell = sell_settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _unit_price(self, symbol_in: str, symbol_out: str) -> Decimal:
        """Output per one whole unit of symbol_in."""
        one_unit = 10 ** TOKEN_DECIMALS[symbol_in]
        quote = await self._aggregator.get_quote(
            TOKEN_MINTS[symbol_in],
            TOKEN_MINTS[symbol_out],
            one_unit,
            PRICE_PROBE_SLIPPAGE_BPS,
        )
        return from_raw_amount(quote.out_amount, TOKEN_DECIMALS[symbol_out])

    async def price_usd(self) -> Decimal | None:
        """Return the WATT price in USD.

        Returns:
            The price; Decimal("0") (unverified) when no route works and
            SELL__MIN_PRICE_USD is 0; None when no route works otherwise.
        """
        try:
            try:
                price = await self._unit_price("WATT", "USDC")
                self._logger.info("watt_price_direct", price_usd=f"{price:.6f}")
                return price
            except ApiRequestError as e:
                self._logger.info(
                    "watt_price_direct_unavailable",
                    error_message=str(e),
                    message="Direct WATT/USDC route not available, trying via SOL",
                )
            watt_in_sol = await self._unit_price("WATT", "SOL")
            sol_price = await self._unit_price("SOL", "USDC")
            price = watt_in_sol * sol_price
            self._logger.info(
                "watt_price_via_sol",
                price_usd=f"{price:.6f}",
                sol_price_usd=f"{sol_price:.2f}",
            )
            return price
        except ApiRequestError as e:
            self._logger.warning("watt_price_unavailable", error_message=str(e))

        if self._sell.min_price_usd == 0:
            self._logger.warning(
                "watt_price_unverified",
                message="SELL__MIN_PRICE_USD is 0, will attempt swap without price verification",
            )
            return UNVERIFIED_PRICE
        return None
