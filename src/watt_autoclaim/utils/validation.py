"""Helpers for log-safe addresses and token amount conversion."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. Watt...7WXQ)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:4]}...{addr[-4:]}"


def to_raw_amount(amount: Decimal, decimals: int) -> int:
    """Convert a human-readable token amount to base units, rounding down."""
    scaled = (amount * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


def from_raw_amount(raw: int | str, decimals: int) -> Decimal:
    """Convert base units (int or numeric string) to a human-readable Decimal."""
    return Decimal(int(raw)) / (Decimal(10) ** decimals)
