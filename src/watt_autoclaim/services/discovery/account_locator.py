# -*- coding: utf-8 -*-
"""Locate the user's state account on the reward program.

The program does not derive state accounts from seeds, so the account is found
by scanning program-owned accounts for the owner's address right after the
8-byte account discriminator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from solders.pubkey import Pubkey

from watt_autoclaim.constants import REWARD_PROGRAM_ID, STATE_ACCOUNT_OWNER_OFFSET
from watt_autoclaim.exceptions import AccountNotInitializedError
from watt_autoclaim.utils.validation import mask_address

if TYPE_CHECKING:
    from watt_autoclaim.clients.solana_rpc import SolanaRpcClient


class IAccountLocator(ABC):
    """Interface for finding the program state account of a wallet (RPC scan, indexer, cache...)."""

    @abstractmethod
    async def locate(self, owner: Pubkey) -> Pubkey:
        """Return the state account for owner.

        Raises:
            AccountNotInitializedError: If the owner has no state account.
        """
        ...


class RpcAccountLocator(IAccountLocator):
    """Finds the state account with a getProgramAccounts memcmp scan."""

    def __init__(
        self,
        rpc_client: "SolanaRpcClient",
        *,
        program_id: Pubkey = REWARD_PROGRAM_ID,
        owner_offset: int = STATE_ACCOUNT_OWNER_OFFSET,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._rpc = rpc_client
        self._program_id = program_id
        self._owner_offset = owner_offset
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def locate(self, owner: Pubkey) -> Pubkey:
        """Scan program accounts whose owner field equals owner.

        With several matches the first one returned by the node is used and a
        warning is logged; nothing in the account data disambiguates them.
        """
        self._logger.info(
            "state_account_search_started",
            owner_masked=mask_address(str(owner)),
            program_id=str(self._program_id),
        )
        accounts = await self._rpc.get_program_accounts(
            str(self._program_id),
            memcmp_offset=self._owner_offset,
            memcmp_bytes=str(owner),
        )
        candidates = [a["pubkey"] for a in accounts if a.get("pubkey")]
        if not candidates:
            self._logger.error(
                "state_account_not_found",
                owner_masked=mask_address(str(owner)),
                message="Initialize your account on CodeGame before claiming",
            )
            raise AccountNotInitializedError(str(owner))
        if len(candidates) > 1:
            self._logger.warning(
                "state_account_multiple_found",
                count=len(candidates),
                using=candidates[0],
                message=f"Found {len(candidates)} state accounts, using first one",
            )
        return Pubkey.from_string(candidates[0])
