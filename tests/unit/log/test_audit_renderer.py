# -*- coding: utf-8 -*-
"""Unit tests for the plain-text audit log renderer."""

from __future__ import annotations

from watt_autoclaim.logging.config import render_audit_line


def test_renders_timestamp_level_event_and_fields() -> None:
    line = render_audit_line(
        None,
        "info",
        {
            "timestamp": "2026-02-13T12:00:00Z",
            "level": "info",
            "event": "claim_success",
            "logger": "ClaimExecutor",
            "claimed_watt": "100.000000",
            "amount_source": "transaction",
        },
    )

    assert line == (
        "[2026-02-13T12:00:00Z] [INFO] claim_success claimed_watt=100.000000 amount_source=transaction"
    )


def test_appends_exception_on_following_lines() -> None:
    line = render_audit_line(
        None,
        "error",
        {"timestamp": "t", "event": "main_fatal_error", "exception": "Traceback...\nValueError: x"},
    )

    assert line == "[t] [ERROR] main_fatal_error\nTraceback...\nValueError: x"
