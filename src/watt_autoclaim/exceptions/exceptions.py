"""Custom exceptions for the claim-and-sell pipeline."""

from __future__ import annotations

from typing import Any


class AutoClaimError(Exception):
    """Base exception for claim-and-sell errors."""

    pass


class ConfigurationError(AutoClaimError):
    """Raised when run configuration is invalid (fatal before any network action)."""

    pass


class MissingRequiredConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration: {key}")
        self.key = key


class ApiRequestError(AutoClaimError):
    """Raised when an HTTP request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        self.cause = cause


class RpcError(AutoClaimError):
    """Raised when the Solana JSON-RPC node answers with an error object."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        code: int | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.code = code
        self.data = data


class DiscoveryError(AutoClaimError):
    """Raised when the user's program state account cannot be located."""

    pass


class AccountNotInitializedError(DiscoveryError):
    """Raised when no state account exists for the wallet on the reward program."""

    def __init__(self, owner: str) -> None:
        super().__init__(
            "User state account not found. Have you initialized your account on CodeGame?"
        )
        self.owner = owner


class TransactionError(AutoClaimError):
    """Raised when a transaction is rejected by the network or fails on-chain."""

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        signature: str | None = None,
        chain_error: Any = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.signature = signature
        self.chain_error = chain_error


class ConfirmationTimeoutError(TransactionError):
    """Raised when a submitted transaction is not confirmed within the configured wait."""

    pass


class OracleUnavailableError(AutoClaimError):
    """Raised when no price is available and the minimum-price gate requires one."""

    pass
