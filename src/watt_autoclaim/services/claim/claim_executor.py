# -*- coding: utf-8 -*-
"""ClaimExecutor: build, sign, submit and confirm the WATT claim, then measure what arrived."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID

from watt_autoclaim.constants import (
    CLAIM_INSTRUCTION_DISCRIMINATOR,
    GLOBAL_CONFIG_ACCOUNT,
    REWARD_PROGRAM_ID,
    VAULT_ACCOUNT,
    WATT_MINT,
)
from watt_autoclaim.exceptions import ApiRequestError, RpcError, TransactionError
from watt_autoclaim.models.claim_outcome import ClaimOutcome
from watt_autoclaim.services.claim.reconciliation import (
    reconcile_claimed_amount,
    transaction_token_delta,
)
from watt_autoclaim.utils.validation import mask_address

if TYPE_CHECKING:
    from watt_autoclaim.clients.solana_rpc import SolanaRpcClient
    from watt_autoclaim.config import Settings
    from watt_autoclaim.services.balance import BalanceOracle

CLAIM_STAGE = "claim"


class ClaimExecutor:
    """Claims accrued WATT from the reward vault into the wallet's token account.

    Submission is never retried: a failed or rejected claim aborts the run.
    """

    def __init__(
        self,
        rpc_client: "SolanaRpcClient",
        balance_oracle: "BalanceOracle",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            rpc_client: For blockhash, submission, confirmation and transaction lookup.
            balance_oracle: For the post-claim balance (wallet-level delta).
            settings: Application settings (explorer link prefix).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._rpc = rpc_client
        self._balances = balance_oracle
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def build_claim_instruction(self, owner: Pubkey, state_account: Pubkey) -> Instruction:
        """Build the claim instruction. Account order is fixed by the program."""
        destination = self._balances.token_account_for(owner)
        accounts = [
            AccountMeta(pubkey=owner, is_signer=True, is_writable=True),
            AccountMeta(pubkey=state_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=GLOBAL_CONFIG_ACCOUNT, is_signer=False, is_writable=True),
            AccountMeta(pubkey=VAULT_ACCOUNT, is_signer=False, is_writable=True),
            AccountMeta(pubkey=destination, is_signer=False, is_writable=True),
            AccountMeta(pubkey=WATT_MINT, is_signer=False, is_writable=False),
            AccountMeta(pubkey=TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        ]
        return Instruction(REWARD_PROGRAM_ID, CLAIM_INSTRUCTION_DISCRIMINATOR, accounts)

    async def build_signed_transaction(self, wallet: Keypair, state_account: Pubkey) -> Transaction:
        """Sign the claim against a blockhash fetched right before signing."""
        instruction = self.build_claim_instruction(wallet.pubkey(), state_account)
        latest = await self._rpc.get_latest_blockhash()
        return Transaction.new_signed_with_payer(
            [instruction],
            wallet.pubkey(),
            [wallet],
            Hash.from_string(latest.blockhash),
        )

    async def claim(
        self,
        wallet: Keypair,
        state_account: Pubkey,
        *,
        balance_before: Decimal,
    ) -> ClaimOutcome:
        """Claim, wait for confirmation and reconcile the claimed amount.

        Args:
            wallet: Signer and fee payer.
            state_account: User state account from the locator.
            balance_before: WATT balance read before the claim.

        Returns:
            ClaimOutcome; claimed_amount is None when neither signal shows a positive delta.

        Raises:
            TransactionError: If the claim is rejected, fails on-chain or is not confirmed in time.
        """
        self._logger.info("claim_transaction_building", state_account=str(state_account))
        transaction = await self.build_signed_transaction(wallet, state_account)

        self._logger.info("claim_transaction_sending")
        try:
            signature = await self._rpc.send_raw_transaction(bytes(transaction))
        except RpcError as e:
            raise TransactionError(
                f"Claim transaction rejected: {e}",
                stage=CLAIM_STAGE,
                chain_error=e.data,
            ) from e
        except ApiRequestError as e:
            raise TransactionError(
                f"Claim transaction submission failed: {e}",
                stage=CLAIM_STAGE,
                signature=str(transaction.signatures[0]),
            ) from e
        self._logger.info("claim_transaction_sent", signature=signature)

        try:
            await self._rpc.confirm_transaction(signature, stage=CLAIM_STAGE)
        except (RpcError, ApiRequestError) as e:
            raise TransactionError(
                f"Claim confirmation failed: {e}",
                stage=CLAIM_STAGE,
                signature=signature,
            ) from e

        owner = wallet.pubkey()
        self._logger.info("claim_amount_fetching", signature=signature)
        tx_delta = await self._transaction_delta(signature, owner)
        balance_after = await self._balances.read(owner)
        balance_delta = balance_after - balance_before
        reconciled = reconcile_claimed_amount(tx_delta, balance_delta)

        outcome = ClaimOutcome.create(signature, reconciled.amount, reconciled.source)
        if outcome.amount_determined:
            self._logger.info(
                "claim_success",
                claimed_watt=f"{outcome.claimed_amount:.6f}",
                amount_source=outcome.amount_source.value,
                owner_masked=mask_address(str(owner)),
            )
        else:
            self._logger.info(
                "claim_success_amount_undetermined",
                balance_before=str(balance_before),
                balance_after=str(balance_after),
                message="amount detection failed, check transaction",
            )
        self._logger.info("claim_transaction_link", url=f"{self._settings.solana.explorer_tx_url}{signature}")
        return outcome

    async def _transaction_delta(self, signature: str, owner: Pubkey) -> Decimal | None:
        """Token delta from the transaction record; None if it cannot be fetched."""
        try:
            transaction = await self._rpc.get_transaction(signature)
        except (RpcError, ApiRequestError) as e:
            self._logger.warning(
                "claim_amount_lookup_failed",
                signature=signature,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return None
        return transaction_token_delta(transaction, str(owner), str(WATT_MINT))
