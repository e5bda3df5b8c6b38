# -*- coding: utf-8 -*-
"""Unit tests for settings loading and run validation."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest

from watt_autoclaim.config.config import (
    SellSettings,
    Settings,
    validate_run_settings,
    validate_sell_settings,
)
from watt_autoclaim.exceptions import ConfigurationError, MissingRequiredConfigError


def test_nested_env_vars_populate_sections(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SELL__ENABLED", "true")
    monkeypatch.setenv("SELL__PERCENTAGE", "42.5")
    monkeypatch.setenv("SELL__TOKEN", "USDC")
    monkeypatch.setenv("CLAIM__DRY_RUN", "false")
    monkeypatch.setenv("SOLANA__RPC_URL", "https://rpc.example")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.sell.enabled is True
    assert settings.sell.percentage == Decimal("42.5")
    assert settings.sell.token == "USDC"
    assert settings.claim.dry_run is False
    assert settings.solana.rpc_url == "https://rpc.example"


def test_defaults_are_safe(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CLAIM__DRY_RUN", "SELL__ENABLED", "CLAIM__MIN_CLAIMABLE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.claim.dry_run is True
    assert settings.sell.enabled is False
    assert settings.claim.min_claimable == Decimal("1")
    assert settings.api.jupiter_api_host == "https://lite-api.jup.ag/swap/v1"


def test_service_version_is_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP__SERVICE_VERSION", "1.2.3")
    monkeypatch.setenv("APP__ENVIRONMENT", "production")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.app.service_version == "1.2.3"
    assert settings.app.environment == "production"


def test_service_version_defaults_to_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP__SERVICE_VERSION", raising=False)

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.app.service_version is None


@pytest.mark.parametrize("token", ["SOL", "usdc", "USDT"])
def test_validate_sell_settings_accepts_supported_tokens(
    token: str,
    sell_settings_factory: Callable[..., SellSettings],
) -> None:
    validate_sell_settings(sell_settings_factory(token=token))


def test_validate_run_settings_requires_private_key(
    sell_settings_factory: Callable[..., SellSettings],
) -> None:
    settings: Any = SimpleNamespace(solana=SimpleNamespace(private_key="  "), sell=sell_settings_factory())

    with pytest.raises(MissingRequiredConfigError, match="SOLANA__PRIVATE_KEY"):
        validate_run_settings(settings)


def test_validate_run_settings_checks_sell_only_when_enabled(
    sell_settings_factory: Callable[..., SellSettings],
) -> None:
    disabled: Any = SimpleNamespace(
        solana=SimpleNamespace(private_key="secret"),
        sell=sell_settings_factory(enabled=False, percentage=Decimal("150")),
    )
    enabled: Any = SimpleNamespace(
        solana=SimpleNamespace(private_key="secret"),
        sell=sell_settings_factory(enabled=True, percentage=Decimal("150")),
    )

    validate_run_settings(disabled)
    with pytest.raises(ConfigurationError, match="between 0 and 100"):
        validate_run_settings(enabled)
