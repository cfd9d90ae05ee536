# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from decimal import Decimal

from dependency_injector import containers, providers

from coin_maker.clients.http import AsyncHttpClient
from coin_maker.clients.toncenter import TonCenterClient
from coin_maker.config import get_settings
from coin_maker.persistence.repositories.in_memory import InMemoryDocumentRepository
from coin_maker.services.history import HistoryLog
from coin_maker.services.sales import SaleEngine
from coin_maker.services.token_ledger import TokenLedger
from coin_maker.services.transfer import TransferHandler


def _to_decimal(value: float) -> Decimal:
    """Settings hold floats; services compute in Decimal."""
    return Decimal(str(value))


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, chain client, document store and services."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    chain_client = providers.Singleton(
        TonCenterClient,
        http_client=http_client,
        settings=config,
    )

    document_repository = providers.Singleton(InMemoryDocumentRepository)

    history_log = providers.Singleton(
        HistoryLog,
        document_repository=document_repository,
        query_limit=config.provided.marketplace.history_limit,
    )

    token_ledger = providers.Singleton(
        TokenLedger,
        document_repository=document_repository,
        platform_wallet=config.provided.marketplace.platform_wallet,
        default_dynamic_price=providers.Callable(
            _to_decimal, config.provided.marketplace.default_dynamic_price
        ),
        price_impact_alpha=providers.Callable(
            _to_decimal, config.provided.marketplace.price_impact_alpha
        ),
    )

    sale_engine = providers.Singleton(
        SaleEngine,
        document_repository=document_repository,
        chain_client=chain_client,
        token_ledger=token_ledger,
        history_log=history_log,
        amount_epsilon=providers.Callable(
            _to_decimal, config.provided.marketplace.amount_epsilon
        ),
        scan_limit=config.provided.chain.scan_limit,
        scan_window_seconds=config.provided.chain.scan_window_seconds,
    )

    transfer_handler = providers.Singleton(
        TransferHandler,
        token_ledger=token_ledger,
        history_log=history_log,
    )
