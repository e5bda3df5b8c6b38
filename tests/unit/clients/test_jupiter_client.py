# -*- coding: utf-8 -*-
"""Unit tests for JupiterClient request shapes."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from watt_autoclaim.clients.aggregator.jupiter import JupiterClient
from watt_autoclaim.exceptions import ApiRequestError
from watt_autoclaim.models.swap_quote import QuoteAlreadyUsedError, SwapQuote

WATT = "WattxY7ZKjPGcPn4mDK442SA7YQC4xwnjsSHPAJ7WXQ"
SOL = "So11111111111111111111111111111111111111112"


def _quote_response() -> dict[str, Any]:
    return {
        "inputMint": WATT,
        "outputMint": SOL,
        "inAmount": "1000000",
        "outAmount": "250000",
        "slippageBps": 50,
        "routePlan": [],
    }


async def test_get_quote_sends_expected_params(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value=_quote_response()))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)

    quote = await client.get_quote(WATT, SOL, 1_000_000, 50)

    assert quote.out_amount == 250_000
    http.get.assert_awaited_once_with(
        "https://jup.test/swap/v1/quote",
        params={
            "inputMint": WATT,
            "outputMint": SOL,
            "amount": "1000000",
            "slippageBps": "50",
            "onlyDirectRoutes": "false",
            "asLegacyTransaction": "false",
        },
    )


async def test_get_quote_without_route_raises(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"error": "Could not find any route"}))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)

    with pytest.raises(ApiRequestError, match="Could not find any route"):
        await client.get_quote(WATT, SOL, 1_000_000, 50)


async def test_build_swap_transaction_payload(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(post=AsyncMock(return_value={"swapTransaction": "AQID", "lastValidBlockHeight": 9}))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)
    quote = SwapQuote.from_response(_quote_response())

    tx = await client.build_swap_transaction(quote, "UserPubkey111", priority_fee_lamports=10_000)

    assert tx == "AQID"
    url = http.post.await_args.args[0]
    payload = http.post.await_args.kwargs["json"]
    assert url == "https://jup.test/swap/v1/swap"
    assert payload["quoteResponse"] == _quote_response()
    assert payload["userPublicKey"] == "UserPubkey111"
    assert payload["wrapAndUnwrapSol"] is True
    assert payload["dynamicComputeUnitLimit"] is True
    assert payload["prioritizationFeeLamports"] == {
        "priorityLevelWithMaxLamports": {"maxLamports": 10_000, "priorityLevel": "high"}
    }


async def test_build_swap_transaction_without_priority_fee(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(post=AsyncMock(return_value={"swapTransaction": "AQID"}))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)

    await client.build_swap_transaction(SwapQuote.from_response(_quote_response()), "UserPubkey111")

    assert "prioritizationFeeLamports" not in http.post.await_args.kwargs["json"]


async def test_build_swap_transaction_rejects_reused_quote(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(post=AsyncMock(return_value={"swapTransaction": "AQID"}))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)
    quote = SwapQuote.from_response(_quote_response())
    await client.build_swap_transaction(quote, "UserPubkey111")

    with pytest.raises(QuoteAlreadyUsedError):
        await client.build_swap_transaction(quote, "UserPubkey111")

    assert http.post.await_count == 1


async def test_build_swap_transaction_missing_transaction_raises(
    settings_factory: Callable[..., Any],
    get_logger: Callable[[str], Mock],
) -> None:
    http = SimpleNamespace(post=AsyncMock(return_value={"error": "insufficient funds"}))
    client = JupiterClient(http, settings_factory(), get_logger=get_logger)

    with pytest.raises(ApiRequestError):
        await client.build_swap_transaction(SwapQuote.from_response(_quote_response()), "UserPubkey111")
