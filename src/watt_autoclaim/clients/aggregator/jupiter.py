# -*- coding: utf-8 -*-
"""Jupiter swap API client (v1: /quote and /swap)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, cast
from structlog.contextvars import bound_contextvars

from watt_autoclaim.clients.aggregator.base import ISwapAggregator
from watt_autoclaim.config import Settings
from watt_autoclaim.exceptions import ApiRequestError
from watt_autoclaim.models.swap_quote import SwapQuote

if TYPE_CHECKING:
    from watt_autoclaim.clients.http import AsyncHttpClient


class JupiterClient(ISwapAggregator):
    """Client for the Jupiter aggregator (quotes and swap transactions)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.jupiter_api_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.jupiter_api_host.rstrip("/")

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_bps: int,
    ) -> SwapQuote:
        """Fetch a quote (GET /quote).

        Args:
            input_mint: Mint to sell.
            output_mint: Mint to receive.
            amount: Raw input amount (base units).
            slippage_bps: Slippage tolerance in basis points.

        Returns:
            SwapQuote built from the response.

        Raises:
            ApiRequestError: On HTTP failure or when Jupiter reports no route.
        """
        with bound_contextvars(
            jupiter_input_mint=input_mint,
            jupiter_output_mint=output_mint,
            jupiter_amount=amount,
        ):
            url = f"{self._base_url()}/quote"
            params: Dict[str, Any] = {
                "inputMint": input_mint,
                "outputMint": output_mint,
                "amount": str(amount),
                "slippageBps": str(slippage_bps),
                "onlyDirectRoutes": "false",
                "asLegacyTransaction": "false",
            }
            data = await self._http.get(url, params=params)
            if not isinstance(data, dict) or "outAmount" not in data:
                error = data.get("error") if isinstance(data, dict) else None
                raise ApiRequestError(
                    f"Jupiter quote failed: {error or data!r}",
                    url=url,
                )
            quote = SwapQuote.from_response(cast(dict[str, Any], data))
            self._logger.debug(
                "jupiter_quote_received",
                in_amount=quote.in_amount,
                out_amount=quote.out_amount,
                route=quote.route_labels,
                price_impact_pct=quote.price_impact_pct,
            )
            return quote

    async def build_swap_transaction(
        self,
        quote: SwapQuote,
        user_public_key: str,
        *,
        priority_fee_lamports: int = 0,
    ) -> str:
        """Request the swap transaction for a quote (POST /swap).

        Args:
            quote: Quote to execute; consumed by this call.
            user_public_key: Signer / fee payer address.
            priority_fee_lamports: If > 0, caps the priority fee at this many lamports
                with priority level "high".

        Returns:
            Base64 serialized VersionedTransaction.

        Raises:
            QuoteAlreadyUsedError: If the quote was already consumed.
            ApiRequestError: On HTTP failure or a response without a transaction.
        """
        payload: Dict[str, Any] = {
            "quoteResponse": quote.consume(),
            "userPublicKey": user_public_key,
            "wrapAndUnwrapSol": True,
            "dynamicComputeUnitLimit": True,
        }
        if priority_fee_lamports > 0:
            payload["prioritizationFeeLamports"] = {
                "priorityLevelWithMaxLamports": {
                    "maxLamports": priority_fee_lamports,
                    "priorityLevel": "high",
                }
            }
        url = f"{self._base_url()}/swap"
        data = await self._http.post(url, json=payload)
        swap_transaction = data.get("swapTransaction") if isinstance(data, dict) else None
        if not swap_transaction:
            raise ApiRequestError(f"Jupiter swap returned no transaction: {data!r}", url=url)
        self._logger.debug(
            "jupiter_swap_transaction_built",
            last_valid_block_height=data.get("lastValidBlockHeight"),
            prioritization_fee_lamports=data.get("prioritizationFeeLamports"),
        )
        return str(swap_transaction)
