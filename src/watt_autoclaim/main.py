# -*- coding: utf-8 -*-
"""
Entry point for one WATT claim-and-sell run.

Orchestrates: logging, settings validation, wallet, container, one orchestrator
pass, client shutdown. Exit code 0 on success (including below-threshold and
skipped sells), 1 on any failure.

Run with: python -m watt_autoclaim.main  (or the watt-autoclaim script)

Notebook usage:
    from watt_autoclaim.main import run
    report = await run()
"""
from __future__ import annotations

import asyncio
import sys
import structlog
from typing import Any

from watt_autoclaim.DI import Container
from watt_autoclaim.config import get_settings, validate_run_settings
from watt_autoclaim.logging.config import configure_logging
from watt_autoclaim.models.run_report import RunReport
from watt_autoclaim.utils import mask_address
from watt_autoclaim.wallet import load_keypair


def _log_report(logger: Any, report: RunReport) -> None:
    claim = report.claim
    decision = report.sell_decision
    swap = report.swap
    fields: dict[str, Any] = {
        "status": report.status.value,
        "dry_run": report.dry_run,
        "state_account": report.state_account,
        "balance_before": f"{report.balance_before:.6f}",
    }
    if claim is not None:
        fields["claim_signature"] = claim.signature
        fields["claimed_watt"] = (
            f"{claim.claimed_amount:.6f}" if claim.claimed_amount is not None else None
        )
        fields["amount_source"] = claim.amount_source.value
    if decision is not None:
        fields["sell_watt"] = f"{decision.amount_to_sell:.6f}"
        fields["keep_watt"] = f"{decision.amount_to_keep:.6f}"
        if decision.skip_reason is not None:
            fields["skip_reason"] = decision.skip_reason.value
    if swap is not None:
        fields["swap_signature"] = swap.signature
        fields["swap_output"] = f"{swap.output_amount:.6f} {swap.output_token}"
    if report.succeeded:
        logger.info("main_run_complete", **fields)
    else:
        logger.error("main_run_failed", error=report.error, **fields)


async def run() -> RunReport:
    """Execute one run. Raises on configuration, discovery or claim failures."""
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")

    validate_run_settings(settings)
    wallet = load_keypair(settings.solana.private_key)

    logger.info(
        "main_run_started",
        wallet=mask_address(str(wallet.pubkey())),
        mode="DRY RUN (simulation)" if settings.claim.dry_run else "LIVE",
        min_claimable=str(settings.claim.min_claimable),
        auto_sell=(
            f"{settings.sell.percentage}% to {settings.sell.token.upper()}"
            if settings.sell.enabled
            else "disabled"
        ),
    )

    container = Container()
    http_client = container.http_client()
    try:
        orchestrator = container.orchestrator()
        report = await orchestrator.run(wallet)
    finally:
        await http_client.aclose()

    _log_report(logger, report)
    return report


def main() -> None:
    logger = structlog.get_logger("main")
    try:
        report = asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("main_interrupted")
        sys.exit(1)
    except Exception as e:
        logger.exception("main_fatal_error", error_type=type(e).__name__, error_message=str(e))
        sys.exit(1)
    sys.exit(0 if report.succeeded else 1)


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
