# -*- coding: utf-8 -*-
"""Unit tests for the process exit code of main()."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from watt_autoclaim import main as entrypoint
from watt_autoclaim.exceptions import AccountNotInitializedError, MissingRequiredConfigError
from watt_autoclaim.models.run_report import RunReport, RunStatus


def _report(status: RunStatus) -> RunReport:
    return RunReport(status=status, dry_run=False, state_account="State111", balance_before=Decimal("0"))


@pytest.mark.parametrize(
    ("status", "exit_code"),
    [
        (RunStatus.SOLD, 0),
        (RunStatus.BELOW_THRESHOLD, 0),
        (RunStatus.SELL_SKIPPED, 0),
        (RunStatus.DRY_RUN, 0),
        (RunStatus.SELL_FAILED, 1),
    ],
)
def test_exit_code_follows_report(
    status: RunStatus,
    exit_code: int,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(entrypoint, "run", AsyncMock(return_value=_report(status)))

    with pytest.raises(SystemExit) as exc_info:
        entrypoint.main()

    assert exc_info.value.code == exit_code


@pytest.mark.parametrize(
    "error",
    [
        AccountNotInitializedError("Owner111"),
        MissingRequiredConfigError("SOLANA__PRIVATE_KEY"),
        RuntimeError("unexpected"),
    ],
)
def test_unhandled_error_exits_with_failure(
    error: Exception,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(entrypoint, "run", AsyncMock(side_effect=error))

    with pytest.raises(SystemExit) as exc_info:
        entrypoint.main()

    assert exc_info.value.code == 1
