"""Wallet loading."""

from watt_autoclaim.wallet.keypair import load_keypair

__all__ = ["load_keypair"]
