# -*- coding: utf-8 -*-
"""ClaimAndSellOrchestrator: sequences discovery, claim, reconciliation and the optional sell.

Stages run strictly in order; each one depends on the confirmed result of the
previous one. Claim-stage errors propagate and abort the run. Sell-stage
errors are recorded on the RunReport, leaving the completed claim intact.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from watt_autoclaim.exceptions import ApiRequestError, OracleUnavailableError, TransactionError
from watt_autoclaim.models.run_report import RunReport, RunStatus
from watt_autoclaim.services.strategy import SellPolicy
from watt_autoclaim.utils.validation import mask_address

if TYPE_CHECKING:
    from solders.keypair import Keypair

    from watt_autoclaim.config import Settings
    from watt_autoclaim.models.sell_decision import SellDecision
    from watt_autoclaim.services.balance import BalanceOracle
    from watt_autoclaim.services.claim import ClaimExecutor
    from watt_autoclaim.services.discovery import IAccountLocator
    from watt_autoclaim.services.pricing import PriceOracle
    from watt_autoclaim.services.swap import SwapExecutor


class ClaimAndSellOrchestrator:
    """Runs one claim-and-sell pass for a wallet and reports where it ended."""

    def __init__(
        self,
        settings: "Settings",
        account_locator: "IAccountLocator",
        balance_oracle: "BalanceOracle",
        claim_executor: "ClaimExecutor",
        price_oracle: "PriceOracle",
        swap_executor: "SwapExecutor",
        sell_policy: Optional[SellPolicy] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Application settings (claim.*, sell.*).
            account_locator: Finds the user state account.
            balance_oracle: WATT balance reads (before the claim).
            claim_executor: Claim submission and reconciliation.
            price_oracle: WATT/USD price for the sell gate.
            swap_executor: Market sell execution.
            sell_policy: Optional; defaults to SellPolicy().
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._settings = settings
        self._locator = account_locator
        self._balances = balance_oracle
        self._claims = claim_executor
        self._prices = price_oracle
        self._swaps = swap_executor
        self._policy = sell_policy or SellPolicy()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run(self, wallet: "Keypair") -> RunReport:
        """Locate, read, claim (or simulate), reconcile, then evaluate and execute the sell.

        Raises:
            DiscoveryError: If the state account does not exist.
            TransactionError: If the claim fails.
            ConfigurationError: If the sell configuration is invalid.
        """
        owner = wallet.pubkey()
        dry_run = self._settings.claim.dry_run

        state_account = await self._locator.locate(owner)
        self._logger.info("state_account_found", state_account=str(state_account))

        balance_before = await self._balances.read(owner)
        self._logger.info(
            "balance_before_claim",
            balance_watt=f"{balance_before:.6f}",
            owner_masked=mask_address(str(owner)),
        )

        report = RunReport(
            status=RunStatus.DRY_RUN if dry_run else RunStatus.CLAIMED,
            dry_run=dry_run,
            state_account=str(state_account),
            balance_before=balance_before,
        )

        if dry_run:
            return await self._simulate(report)

        outcome = await self._claims.claim(wallet, state_account, balance_before=balance_before)
        report = report.with_status(RunStatus.CLAIMED, claim=outcome)

        min_claimable = self._settings.claim.min_claimable
        claimed = outcome.claimed_amount
        if claimed is None or claimed < min_claimable:
            self._logger.warning(
                "claim_below_threshold",
                claimed_watt=f"{claimed:.6f}" if claimed is not None else None,
                min_claimable=str(min_claimable),
                message="Claimed amount is below minimum. Skipping auto-sell.",
            )
            return report.with_status(RunStatus.BELOW_THRESHOLD)

        if not self._settings.sell.enabled:
            self._logger.info("auto_sell_disabled")
            return report

        return await self._sell_stage(wallet, claimed, report)

    async def _simulate(self, report: RunReport) -> RunReport:
        """Dry run: nothing is signed or submitted; the sell path runs on the threshold amount."""
        self._logger.info("dry_run_would_claim")
        if not self._settings.sell.enabled:
            return report

        stand_in = self._settings.claim.min_claimable
        self._logger.info("dry_run_sell_simulation", stand_in_claimed_watt=f"{stand_in:.6f}")
        try:
            decision = await self._decide(stand_in)
        except OracleUnavailableError as e:
            self._log_sell_failure(e)
            return report.with_status(RunStatus.SELL_FAILED, error=str(e))
        report = report.with_status(RunStatus.DRY_RUN, sell_decision=decision)
        if decision.should_sell:
            self._logger.info(
                "dry_run_would_swap",
                sell_watt=f"{decision.amount_to_sell:.6f}",
                output_token=decision.output_token,
            )
        return report

    async def _decide(self, claimed: Decimal) -> "SellDecision":
        """Size the sell; look up the price only when something would be sold."""
        sell_settings = self._settings.sell
        self._logger.info("auto_sell_started", total_claimed_watt=f"{claimed:.6f}")

        sized = self._policy.size(claimed, sell_settings)
        self._logger.info(
            "auto_sell_sized",
            sell_percentage=str(sell_settings.percentage),
            sell_watt=f"{sized.amount_to_sell:.6f}",
            keep_watt=f"{sized.amount_to_keep:.6f}",
        )
        if not sized.should_sell:
            self._logger.info(
                "auto_sell_skipped",
                reason=sized.skip_reason.value if sized.skip_reason else None,
                message="Sell percentage is 0% or amount too small. Keeping all WATT.",
            )
            return sized

        self._logger.info("auto_sell_target", output_token=sized.output_token)
        price = await self._prices.price_usd()
        decision = self._policy.decide(claimed, sell_settings, price)
        if not decision.should_sell:
            self._logger.warning(
                "auto_sell_skipped",
                reason=decision.skip_reason.value if decision.skip_reason else None,
                price_usd=f"{price:.6f}" if price is not None else None,
                min_price_usd=str(sell_settings.min_price_usd),
            )
        elif decision.price_verified:
            self._logger.info("auto_sell_price_checked", price_usd=f"{decision.price_usd:.6f}")
        else:
            self._logger.warning(
                "auto_sell_price_unverified",
                message="WATT price check skipped (SELL__MIN_PRICE_USD=0)",
            )
        return decision

    async def _sell_stage(self, wallet: "Keypair", claimed: Decimal, report: RunReport) -> RunReport:
        """Decide and execute the sell; failures stay in the report."""
        try:
            decision = await self._decide(claimed)
            report = report.with_status(report.status, sell_decision=decision)
            if not decision.should_sell:
                return report.with_status(RunStatus.SELL_SKIPPED)
            self._logger.info("auto_sell_strategy", strategy="market order (immediate execution)")
            swap = await self._swaps.sell(wallet, decision)
        except (OracleUnavailableError, TransactionError, ApiRequestError) as e:
            self._log_sell_failure(e)
            return report.with_status(RunStatus.SELL_FAILED, error=str(e))
        return report.with_status(RunStatus.SOLD, swap=swap)

    def _log_sell_failure(self, error: Exception) -> None:
        if isinstance(error, OracleUnavailableError):
            self._logger.error(
                "auto_sell_aborted_no_price",
                error_message=str(error),
                message=(
                    "Could not fetch WATT price: no liquidity on Jupiter, network/API issues, "
                    "or token not listed. Set SELL__MIN_PRICE_USD=0 to proceed anyway."
                ),
            )
            return
        self._logger.error(
            "auto_sell_failed",
            error_type=type(error).__name__,
            error_message=str(error),
            signature=getattr(error, "signature", None),
            message="Claim is complete; the sell stage did not finish.",
        )
