# -*- coding: utf-8 -*-
"""Application services."""

from watt_autoclaim.services.balance import BalanceOracle
from watt_autoclaim.services.claim import ClaimExecutor, reconcile_claimed_amount
from watt_autoclaim.services.discovery import IAccountLocator, RpcAccountLocator
from watt_autoclaim.services.orchestrator import ClaimAndSellOrchestrator
from watt_autoclaim.services.pricing import PriceOracle
from watt_autoclaim.services.strategy import SellPolicy
from watt_autoclaim.services.swap import SwapExecutor

__all__ = [
    "BalanceOracle",
    "ClaimAndSellOrchestrator",
    "ClaimExecutor",
    "IAccountLocator",
    "PriceOracle",
    "RpcAccountLocator",
    "SellPolicy",
    "SwapExecutor",
    "reconcile_claimed_amount",
]
