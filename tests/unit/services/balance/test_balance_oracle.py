# -*- coding: utf-8 -*-
"""Unit tests for BalanceOracle."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from solders.keypair import Keypair
from spl.token.instructions import get_associated_token_address

from watt_autoclaim.constants import WATT_MINT
from watt_autoclaim.exceptions import ApiRequestError, RpcError
from watt_autoclaim.services.balance.balance_oracle import BalanceOracle


async def test_reads_associated_token_account(wallet: Keypair, get_logger: Callable[[str], Mock]) -> None:
    rpc = SimpleNamespace(get_token_account_balance=AsyncMock(return_value=Decimal("123.456789")))

    balance = await BalanceOracle(rpc, get_logger=get_logger).read(wallet.pubkey())

    assert balance == Decimal("123.456789")
    expected_ata = get_associated_token_address(wallet.pubkey(), WATT_MINT)
    rpc.get_token_account_balance.assert_awaited_once_with(str(expected_ata))


@pytest.mark.parametrize(
    "error",
    [
        RpcError("Invalid param: could not find account", method="getTokenAccountBalance", code=-32602),
        ApiRequestError("POST failed after 3 attempt(s)"),
    ],
)
async def test_unreadable_account_reads_as_zero(
    error: Exception,
    wallet: Keypair,
    get_logger: Callable[[str], Mock],
) -> None:
    rpc = SimpleNamespace(get_token_account_balance=AsyncMock(side_effect=error))

    assert await BalanceOracle(rpc, get_logger=get_logger).read(wallet.pubkey()) == Decimal("0")
