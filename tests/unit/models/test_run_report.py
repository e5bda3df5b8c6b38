# -*- coding: utf-8 -*-
"""Unit tests for RunReport and SellDecision helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from watt_autoclaim.models.run_report import RunReport, RunStatus
from watt_autoclaim.models.sell_decision import SellDecision, SkipReason


def _report(status: RunStatus = RunStatus.CLAIMED) -> RunReport:
    return RunReport(status=status, dry_run=False, state_account="State111", balance_before=Decimal("0"))


@pytest.mark.parametrize(
    ("status", "succeeded"),
    [
        (RunStatus.DRY_RUN, True),
        (RunStatus.BELOW_THRESHOLD, True),
        (RunStatus.CLAIMED, True),
        (RunStatus.SELL_SKIPPED, True),
        (RunStatus.SOLD, True),
        (RunStatus.SELL_FAILED, False),
    ],
)
def test_succeeded_by_status(status: RunStatus, succeeded: bool) -> None:
    assert _report(status).succeeded is succeeded


def test_with_status_returns_updated_copy() -> None:
    original = _report()

    updated = original.with_status(RunStatus.SELL_FAILED, error="no route")

    assert original.status is RunStatus.CLAIMED
    assert original.error is None
    assert updated.status is RunStatus.SELL_FAILED
    assert updated.error == "no route"
    assert updated.state_account == original.state_account


def test_skip_decision_keeps_whole_claim() -> None:
    decision = SellDecision.skip(Decimal("42"), "USDC", SkipReason.BELOW_DUST)

    assert decision.should_sell is False
    assert decision.amount_to_sell == Decimal("0")
    assert decision.amount_to_keep == Decimal("42")
    assert decision.total == Decimal("42")
