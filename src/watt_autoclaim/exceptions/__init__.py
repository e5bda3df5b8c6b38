"""Exceptions subpackage."""

from watt_autoclaim.exceptions.exceptions import (
    AccountNotInitializedError,
    ApiRequestError,
    AutoClaimError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DiscoveryError,
    MissingRequiredConfigError,
    OracleUnavailableError,
    RpcError,
    TransactionError,
)

__all__ = [
    "AccountNotInitializedError",
    "ApiRequestError",
    "AutoClaimError",
    "ConfigurationError",
    "ConfirmationTimeoutError",
    "DiscoveryError",
    "MissingRequiredConfigError",
    "OracleUnavailableError",
    "RpcError",
    "TransactionError",
]
