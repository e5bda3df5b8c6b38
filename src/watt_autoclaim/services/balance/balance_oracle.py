# -*- coding: utf-8 -*-
"""BalanceOracle: current WATT holdings of a wallet."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from watt_autoclaim.constants import WATT_MINT
from watt_autoclaim.exceptions import ApiRequestError, RpcError
from watt_autoclaim.utils.validation import mask_address

if TYPE_CHECKING:
    from watt_autoclaim.clients.solana_rpc import SolanaRpcClient


class BalanceOracle:
    """Reads the reward-token balance held in the owner's associated token account."""

    def __init__(
        self,
        rpc_client: "SolanaRpcClient",
        *,
        mint: Pubkey = WATT_MINT,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the oracle.

        Args:
            rpc_client: For getTokenAccountBalance.
            mint: Token mint to read (defaults to WATT).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._rpc = rpc_client
        self._mint = mint
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def token_account_for(self, owner: Pubkey) -> Pubkey:
        """Associated token account of owner for the configured mint."""
        return get_associated_token_address(owner, self._mint)

    async def read(self, owner: Pubkey) -> Decimal:
        """Return the owner's balance in human units.

        A token account that does not exist yet (new wallet) reads as zero.
        """
        token_account = self.token_account_for(owner)
        try:
            balance = await self._rpc.get_token_account_balance(str(token_account))
        except (RpcError, ApiRequestError) as e:
            self._logger.debug(
                "balance_read_defaulted_to_zero",
                owner_masked=mask_address(str(owner)),
                token_account=str(token_account),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return Decimal("0")
        self._logger.debug(
            "balance_read",
            owner_masked=mask_address(str(owner)),
            balance=str(balance),
        )
        return balance
