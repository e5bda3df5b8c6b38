# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from watt_autoclaim.clients.aggregator import JupiterClient
from watt_autoclaim.clients.http import AsyncHttpClient
from watt_autoclaim.clients.solana_rpc import SolanaRpcClient
from watt_autoclaim.config import get_settings
from watt_autoclaim.services.balance import BalanceOracle
from watt_autoclaim.services.claim import ClaimExecutor
from watt_autoclaim.services.discovery import RpcAccountLocator
from watt_autoclaim.services.orchestrator import ClaimAndSellOrchestrator
from watt_autoclaim.services.pricing import PriceOracle
from watt_autoclaim.services.strategy import SellPolicy
from watt_autoclaim.services.swap import SwapExecutor


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP/RPC/aggregator clients and the run services."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    rpc_client = providers.Singleton(
        SolanaRpcClient,
        http_client=http_client,
        settings=config,
    )

    jupiter_client = providers.Singleton(
        JupiterClient,
        http_client=http_client,
        settings=config,
    )

    account_locator = providers.Singleton(
        RpcAccountLocator,
        rpc_client=rpc_client,
    )

    balance_oracle = providers.Singleton(
        BalanceOracle,
        rpc_client=rpc_client,
    )

    claim_executor = providers.Singleton(
        ClaimExecutor,
        rpc_client=rpc_client,
        balance_oracle=balance_oracle,
        settings=config,
    )

    price_oracle = providers.Singleton(
        PriceOracle,
        aggregator=jupiter_client,
        sell_settings=config.provided.sell,
    )

    swap_executor = providers.Singleton(
        SwapExecutor,
        aggregator=jupiter_client,
        rpc_client=rpc_client,
        settings=config,
    )

    sell_policy = providers.Factory(SellPolicy)

    orchestrator = providers.Singleton(
        ClaimAndSellOrchestrator,
        settings=config,
        account_locator=account_locator,
        balance_oracle=balance_oracle,
        claim_executor=claim_executor,
        price_oracle=price_oracle,
        swap_executor=swap_executor,
        sell_policy=sell_policy,
    )
