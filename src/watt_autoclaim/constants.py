# -*- coding: utf-8 -*-
"""Well-known on-chain addresses and protocol constants for the WATT reward program."""

from __future__ import annotations

from decimal import Decimal

import base58
from solders.pubkey import Pubkey

# CodeGame reward program and its fixed accounts
REWARD_PROGRAM_ID = Pubkey.from_string("CDE3ggMwLy6c8Eu3Ez2mcfrt8W8WmdZXrjR2wzinWbaz")
GLOBAL_CONFIG_ACCOUNT = Pubkey.from_string("Bxe5mdxrNB9xFd4Ciyn7VFWM2enSLqHz9qz89eA35Ws1")
VAULT_ACCOUNT = Pubkey.from_string("GRckfqRR61ULadHAwwXXAU2DqXNSNBnRumCBUNPLK865")
WATT_MINT = Pubkey.from_string("WattxY7ZKjPGcPn4mDK442SA7YQC4xwnjsSHPAJ7WXQ")
WATT_DECIMALS = 6

# Claim instruction selector (8 bytes, 0x0490844774179750)
CLAIM_INSTRUCTION_DISCRIMINATOR: bytes = base58.b58decode("mHL85s1kFy")

# State accounts start with an 8-byte discriminator followed by the owner pubkey
STATE_ACCOUNT_OWNER_OFFSET = 8

# Mint address and decimals per supported symbol
TOKEN_MINTS: dict[str, str] = {
    "SOL": "So11111111111111111111111111111111111111112",
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
    "WATT": str(WATT_MINT),
}
TOKEN_DECIMALS: dict[str, int] = {
    "SOL": 9,
    "USDC": 6,
    "USDT": 6,
    "WATT": WATT_DECIMALS,
}
SELLABLE_TOKENS: tuple[str, ...] = ("SOL", "USDC", "USDT")

# Smallest WATT amount worth a swap
DUST_THRESHOLD = Decimal("0.000001")

# Price probes use a tight slippage; they are never executed
PRICE_PROBE_SLIPPAGE_BPS = 50

# RPC-level rebroadcast attempts for swap submissions
SWAP_SEND_MAX_RETRIES = 3
