# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import Mock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from watt_autoclaim.config.config import (
    ApiSettings,
    ClaimSettings,
    SellSettings,
    SolanaSettings,
)
from watt_autoclaim.models.claim_outcome import AmountSource, ClaimOutcome


@pytest.fixture
def wallet() -> Keypair:
    """Fresh signing keypair for a test."""
    return Keypair()


@pytest.fixture
def state_account() -> Pubkey:
    """Default user state account used by tests."""
    return Pubkey.new_unique()


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double; inspect .info/.warning/.error calls."""
    return Mock()


@pytest.fixture
def get_logger(mock_logger: Mock) -> Callable[[str], Mock]:
    """Logger factory returning the shared mock_logger."""
    return lambda name: mock_logger


@pytest.fixture
def sell_settings_factory() -> Callable[..., SellSettings]:
    """Build SellSettings with an enabled 100% SOL sell and easy overrides."""

    def _build(**overrides: Any) -> SellSettings:
        values: dict[str, Any] = {
            "enabled": True,
            "token": "SOL",
            "percentage": Decimal("100"),
            "min_price_usd": Decimal("0"),
            "slippage_bps": 100,
            "priority_fee_lamports": 0,
        }
        values.update(overrides)
        return SellSettings(**values)

    return _build


@pytest.fixture
def settings_factory(sell_settings_factory: Callable[..., SellSettings]) -> Callable[..., Any]:
    """Build a settings object with the sections services read.

    Keyword overrides: sell (SellSettings), min_claimable, dry_run and any
    SolanaSettings field.
    """

    def _build(
        *,
        sell: SellSettings | None = None,
        min_claimable: Decimal = Decimal("1"),
        dry_run: bool = False,
        **solana_overrides: Any,
    ) -> Any:
        solana_values: dict[str, Any] = {
            "rpc_url": "http://rpc.test",
            "private_key": None,
            "commitment": "confirmed",
            "confirm_timeout_seconds": 10.0,
            "confirm_poll_seconds": 1.0,
            "explorer_tx_url": "https://solscan.io/tx/",
        }
        solana_values.update(solana_overrides)
        return SimpleNamespace(
            api=ApiSettings(jupiter_api_host="https://jup.test/swap/v1", timeout_seconds=5, max_retries=2),
            solana=SolanaSettings(**solana_values),
            claim=ClaimSettings(min_claimable=min_claimable, dry_run=dry_run),
            sell=sell or sell_settings_factory(),
        )

    return _build


@pytest.fixture
def claim_outcome_factory(now_utc: datetime) -> Callable[..., ClaimOutcome]:
    """Build ClaimOutcome with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> ClaimOutcome:
        return ClaimOutcome.create(
            overrides.pop("signature", "claim-sig-1"),
            overrides.pop("claimed_amount", Decimal("100")),
            overrides.pop("amount_source", AmountSource.TRANSACTION),
            timestamp=overrides.pop("timestamp", now_utc),
        )

    return _build
