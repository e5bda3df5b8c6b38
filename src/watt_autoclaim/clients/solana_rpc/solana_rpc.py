"""Solana JSON-RPC client for account scans, token balances and transaction submission."""

from __future__ import annotations

import asyncio
import base64
import time
from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING, Any, cast

import structlog

from watt_autoclaim.clients.solana_rpc.schema import (
    LatestBlockhash,
    ProgramAccountSchema,
    SignatureStatusSchema,
    TransactionSchema,
)
from watt_autoclaim.exceptions import ConfirmationTimeoutError, RpcError, TransactionError

if TYPE_CHECKING:
    from watt_autoclaim.clients.http import AsyncHttpClient
    from watt_autoclaim.config import Settings

_COMMITMENT_RANK = {"processed": 0, "confirmed": 1, "finalized": 2}


class SolanaRpcClient:
    """Client for Solana JSON-RPC. All calls go through the shared AsyncHttpClient."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the RPC client.

        Args:
            http_client: HTTP client for POST requests (JSON-RPC).
            settings: Configuration (uses settings.solana.*).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
            sleep: Awaitable sleep used between confirmation polls (injected for tests).
            clock: Monotonic clock used for the confirmation deadline.
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._sleep = sleep
        self._clock = clock

    @property
    def commitment(self) -> str:
        return self._settings.solana.commitment

    def _rpc_url(self) -> str:
        return self._settings.solana.rpc_url

    async def call(
        self,
        method: str,
        params: list[Any] | None = None,
        *,
        max_attempts: int | None = None,
    ) -> Any:
        """Perform a JSON-RPC call and return its ``result``.

        Args:
            method: JSON-RPC method name (e.g. "getLatestBlockhash").
            params: Positional params.
            max_attempts: Forwarded to the HTTP client (1 disables retries).

        Raises:
            ApiRequestError: If the HTTP request fails.
            RpcError: If the node answers with an error object.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params or [],
        }
        response = await self._http.post(self._rpc_url(), json=payload, max_attempts=max_attempts)
        if not isinstance(response, dict):
            raise RpcError(f"Unexpected RPC response type: {type(response)}", method=method)
        resp_dict = cast(dict[str, Any], response)
        if "error" in resp_dict and resp_dict["error"] is not None:
            err = resp_dict["error"]
            if isinstance(err, dict):
                err_d = cast(dict[str, Any], err)
                raise RpcError(
                    f"RPC error ({method}): {err_d.get('message', err_d)}",
                    method=method,
                    code=err_d.get("code"),
                    data=err_d.get("data"),
                )
            raise RpcError(f"RPC error ({method}): {err}", method=method)
        return resp_dict.get("result")

    async def get_program_accounts(
        self,
        program_id: str,
        *,
        memcmp_offset: int,
        memcmp_bytes: str,
    ) -> list[ProgramAccountSchema]:
        """Scan accounts owned by a program with a single memcmp filter.

        Only account addresses are needed, so a zero-length data slice is requested.
        """
        result = await self.call(
            "getProgramAccounts",
            [
                program_id,
                {
                    "encoding": "base64",
                    "commitment": self.commitment,
                    "dataSlice": {"offset": 0, "length": 0},
                    "filters": [{"memcmp": {"offset": memcmp_offset, "bytes": memcmp_bytes}}],
                },
            ],
        )
        if not isinstance(result, list):
            return []
        return cast(list[ProgramAccountSchema], result)

    async def get_token_account_balance(self, token_account: str) -> Decimal:
        """Return the human-readable balance of an SPL token account.

        Raises:
            RpcError: If the account does not exist (node error -32602) or the call fails.
        """
        result = await self.call(
            "getTokenAccountBalance",
            [token_account, {"commitment": self.commitment}],
        )
        value = (result or {}).get("value") or {}
        ui_amount = value.get("uiAmountString")
        if ui_amount is not None:
            return Decimal(str(ui_amount))
        amount = value.get("amount")
        decimals = value.get("decimals")
        if amount is None or decimals is None:
            return Decimal("0")
        return Decimal(int(amount)) / (Decimal(10) ** int(decimals))

    async def get_latest_blockhash(self) -> LatestBlockhash:
        """Fetch a fresh blockhash at the configured commitment."""
        result = await self.call("getLatestBlockhash", [{"commitment": self.commitment}])
        value = (result or {}).get("value") or {}
        blockhash = value.get("blockhash")
        if not blockhash:
            raise RpcError("getLatestBlockhash returned no blockhash", method="getLatestBlockhash")
        return LatestBlockhash(
            blockhash=str(blockhash),
            last_valid_block_height=int(value.get("lastValidBlockHeight") or 0),
        )

    async def send_raw_transaction(
        self,
        raw_transaction: bytes,
        *,
        skip_preflight: bool = False,
        max_retries: int | None = None,
    ) -> str:
        """Submit a signed, serialized transaction and return its signature.

        The HTTP request is issued exactly once; rebroadcasting is left to the
        RPC node through ``max_retries``.
        """
        config: dict[str, Any] = {
            "encoding": "base64",
            "skipPreflight": skip_preflight,
            "preflightCommitment": self.commitment,
        }
        if max_retries is not None:
            config["maxRetries"] = max_retries
        result = await self.call(
            "sendTransaction",
            [base64.b64encode(raw_transaction).decode("ascii"), config],
            max_attempts=1,
        )
        if not isinstance(result, str) or not result:
            raise RpcError(f"sendTransaction returned no signature: {result!r}", method="sendTransaction")
        return result

    async def get_signature_status(self, signature: str) -> SignatureStatusSchema | None:
        """Return the status of a single signature, or None if the node has not seen it."""
        result = await self.call(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        values = (result or {}).get("value") or []
        if not values:
            return None
        return cast("SignatureStatusSchema | None", values[0])

    async def confirm_transaction(self, signature: str, *, stage: str) -> None:
        """Wait until the signature reaches the configured commitment.

        Polls signature statuses until confirmed or failed, bounded by
        settings.solana.confirm_timeout_seconds.

        Raises:
            TransactionError: If the transaction landed with an error.
            ConfirmationTimeoutError: If it was not confirmed in time.
        """
        target = _COMMITMENT_RANK[self.commitment]
        timeout = self._settings.solana.confirm_timeout_seconds
        deadline = self._clock() + timeout
        while True:
            status = await self.get_signature_status(signature)
            if status is not None:
                if status.get("err") is not None:
                    raise TransactionError(
                        f"Transaction failed: {status['err']}",
                        stage=stage,
                        signature=signature,
                        chain_error=status["err"],
                    )
                reached = status.get("confirmationStatus")
                if reached is not None and _COMMITMENT_RANK.get(reached, -1) >= target:
                    self._logger.debug(
                        "rpc_transaction_confirmed",
                        signature=signature,
                        confirmation_status=reached,
                        slot=status.get("slot"),
                    )
                    return
            if self._clock() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {signature} not confirmed within {timeout:.0f}s",
                    stage=stage,
                    signature=signature,
                )
            await self._sleep(self._settings.solana.confirm_poll_seconds)

    async def get_transaction(self, signature: str) -> TransactionSchema | None:
        """Fetch a confirmed transaction (including token balance metadata)."""
        result = await self.call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "json",
                    "commitment": self.commitment,
                    "maxSupportedTransactionVersion": 0,
                },
            ],
        )
        if not isinstance(result, dict):
            return None
        self._logger.debug(
            "rpc_transaction_fetched",
            signature=signature,
            slot=result.get("slot"),
        )
        return cast(TransactionSchema, result)

