# -*- coding: utf-8 -*-
"""Wallet loading: solders Keypair from a base58 string or a JSON byte array."""

from __future__ import annotations

import json

import base58
from solders.keypair import Keypair

from watt_autoclaim.exceptions import ConfigurationError, MissingRequiredConfigError


def load_keypair(secret: str | None, *, key_name: str = "SOLANA__PRIVATE_KEY") -> Keypair:
    """Build the signing Keypair from its configured secret.

    Accepts the two formats wallets export: a JSON array of 64 byte values
    (Solana CLI keypair file contents) or a base58 string (Phantom export).

    Args:
        secret: Raw secret from configuration.
        key_name: Setting name used in error messages.

    Raises:
        MissingRequiredConfigError: If the secret is empty.
        ConfigurationError: If the secret cannot be decoded into a keypair.
    """
    if secret is None or not secret.strip():
        raise MissingRequiredConfigError(key_name)
    raw = secret.strip()
    try:
        if raw.startswith("["):
            values = json.loads(raw)
            return Keypair.from_bytes(bytes(values))
        return Keypair.from_bytes(base58.b58decode(raw))
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Failed to load wallet from {key_name}: {e}") from e
