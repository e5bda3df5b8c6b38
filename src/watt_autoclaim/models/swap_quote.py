"""SwapQuote: a single-use aggregator quote."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class QuoteAlreadyUsedError(RuntimeError):
    """Raised when a quote is consumed twice."""


@dataclass(eq=False)
class SwapQuote:
    """Aggregator quote for converting in_amount of input_mint into output_mint.

    Quotes go stale as prices move: a quote is consumed by exactly one swap
    request and never cached.
    """

    input_mint: str
    output_mint: str
    in_amount: int
    """Raw input amount (base units)."""
    out_amount: int
    """Raw expected output amount (base units)."""
    slippage_bps: int
    price_impact_pct: str | None = None
    route_labels: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)
    _consumed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> SwapQuote:
        """Build from a Jupiter /quote response (camelCase keys)."""
        labels: list[str] = []
        for step in response.get("routePlan") or []:
            label = (step.get("swapInfo") or {}).get("label")
            if label:
                labels.append(str(label))
        return cls(
            input_mint=str(response.get("inputMint", "")),
            output_mint=str(response.get("outputMint", "")),
            in_amount=int(response.get("inAmount", 0)),
            out_amount=int(response.get("outAmount", 0)),
            slippage_bps=int(response.get("slippageBps", 0)),
            price_impact_pct=response.get("priceImpactPct"),
            route_labels=labels,
            raw=dict(response),
        )

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> dict[str, Any]:
        """Return the raw quote payload for a swap request; allowed only once."""
        if self._consumed:
            raise QuoteAlreadyUsedError("Quote has already been used for a swap; request a new one")
        self._consumed = True
        return self.raw
