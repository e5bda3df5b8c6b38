"""Abstract interface for the swap aggregator (quote + swap-build)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from watt_autoclaim.models.swap_quote import SwapQuote


class ISwapAggregator(ABC):
    """Pricing and swap capability: two sequential, non-cacheable calls."""

    @abstractmethod
    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_bps: int,
    ) -> SwapQuote:
        """Quote converting ``amount`` base units of input_mint into output_mint.

        Raises:
            ApiRequestError: If no quote is available (no route, HTTP failure).
        """
        ...

    @abstractmethod
    async def build_swap_transaction(
        self,
        quote: SwapQuote,
        user_public_key: str,
        *,
        priority_fee_lamports: int = 0,
    ) -> str:
        """Return the base64 serialized, unsigned VersionedTransaction for the quote.

        Consumes the quote.
        """
        ...
