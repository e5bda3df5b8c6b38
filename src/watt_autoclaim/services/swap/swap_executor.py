# -*- coding: utf-8 -*-
"""Swap execution service: quote, build, sign, submit and confirm a market sell of WATT."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from solders.keypair import Keypair
from solders.transaction import VersionedTransaction

from watt_autoclaim.constants import (
    SWAP_SEND_MAX_RETRIES,
    TOKEN_DECIMALS,
    TOKEN_MINTS,
    WATT_DECIMALS,
)
from watt_autoclaim.exceptions import ApiRequestError, RpcError, TransactionError
from watt_autoclaim.models.swap_result import SwapResult
from watt_autoclaim.utils.validation import from_raw_amount, to_raw_amount

if TYPE_CHECKING:
    from watt_autoclaim.clients.aggregator import ISwapAggregator
    from watt_autoclaim.clients.solana_rpc import SolanaRpcClient
    from watt_autoclaim.config import Settings
    from watt_autoclaim.models.sell_decision import SellDecision
    from watt_autoclaim.models.swap_quote import SwapQuote

SWAP_STAGE = "swap"


class SwapExecutor:
    """Executes one immediate market swap of WATT through the aggregator."""

    def __init__(
        self,
        aggregator: "ISwapAggregator",
        rpc_client: "SolanaRpcClient",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._aggregator = aggregator
        self._rpc = rpc_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def quote(self, decision: "SellDecision") -> "SwapQuote":
        """Request a fresh quote for exactly decision.amount_to_sell.

        Raises:
            ApiRequestError: If the aggregator has no quote.
        """
        raw_amount = to_raw_amount(decision.amount_to_sell, WATT_DECIMALS)
        return await self._aggregator.get_quote(
            TOKEN_MINTS["WATT"],
            TOKEN_MINTS[decision.output_token],
            raw_amount,
            self._settings.sell.slippage_bps,
        )

    def _sign(self, wallet: Keypair, swap_transaction_b64: str) -> VersionedTransaction:
        try:
            unsigned = VersionedTransaction.from_bytes(base64.b64decode(swap_transaction_b64))
        except (binascii.Error, ValueError) as e:
            raise TransactionError(
                f"Could not deserialize swap transaction: {e}",
                stage=SWAP_STAGE,
            ) from e
        return VersionedTransaction(unsigned.message, [wallet])

    async def execute(self, wallet: Keypair, quote: "SwapQuote") -> str:
        """Build, sign, submit and confirm the swap for quote.

        The quote is consumed. Submission asks the RPC node to rebroadcast up
        to SWAP_SEND_MAX_RETRIES times; the request itself is not repeated.

        Returns:
            Swap transaction signature.

        Raises:
            ApiRequestError: If the aggregator cannot build the transaction.
            TransactionError: If the swap is rejected, fails on-chain or is not confirmed.
        """
        swap_transaction = await self._aggregator.build_swap_transaction(
            quote,
            str(wallet.pubkey()),
            priority_fee_lamports=self._settings.sell.priority_fee_lamports,
        )
        signed = self._sign(wallet, swap_transaction)
        try:
            signature = await self._rpc.send_raw_transaction(
                bytes(signed),
                max_retries=SWAP_SEND_MAX_RETRIES,
            )
        except RpcError as e:
            raise TransactionError(
                f"Swap transaction rejected: {e}",
                stage=SWAP_STAGE,
                chain_error=e.data,
            ) from e
        except ApiRequestError as e:
            raise TransactionError(
                f"Swap transaction submission failed: {e}",
                stage=SWAP_STAGE,
                signature=str(signed.signatures[0]),
            ) from e
        self._logger.info("swap_transaction_sent", signature=signature)
        try:
            await self._rpc.confirm_transaction(signature, stage=SWAP_STAGE)
        except (RpcError, ApiRequestError) as e:
            raise TransactionError(
                f"Swap confirmation failed: {e}",
                stage=SWAP_STAGE,
                signature=signature,
            ) from e
        return signature

    async def sell(self, wallet: Keypair, decision: "SellDecision") -> SwapResult:
        """Quote and execute the sell described by decision.

        Returns:
            SwapResult with the expected output taken from the quote.
        """
        quote = await self.quote(decision)
        output_decimals = TOKEN_DECIMALS[decision.output_token]
        expected_output = from_raw_amount(quote.out_amount, output_decimals)
        self._logger.info(
            "swap_expected_output",
            expected_output=f"{expected_output:.6f}",
            output_token=decision.output_token,
            route=quote.route_labels,
        )
        signature = await self.execute(wallet, quote)
        result = SwapResult(
            signature=signature,
            input_amount=decision.amount_to_sell,
            output_amount=expected_output,
            output_token=decision.output_token,
            kept_amount=decision.amount_to_keep,
        )
        self._logger.info(
            "swap_success",
            sold_watt=f"{result.input_amount:.6f}",
            output=f"{result.output_amount:.6f}",
            output_token=result.output_token,
            kept_watt=f"{result.kept_amount:.6f}",
        )
        self._logger.info("swap_transaction_link", url=f"{self._settings.solana.explorer_tx_url}{signature}")
        return result
