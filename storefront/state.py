# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import FastAPI, Request

from storefront.changes import ChangeChannel
from storefront.inventory import InventoryCoordinator
from storefront.logging_setup import setup_logging
from storefront.records import Stores, open_stores, seed_demo_products
from storefront.sessions import SessionStore
from storefront.settings import Settings


@dataclass
class AppState:
    settings: Settings
    stores: Stores
    sessions: SessionStore
    channel: ChangeChannel
    inventory: InventoryCoordinator
    logger: logging.Logger


def init_state(settings: Settings) -> AppState:
    # Ensure data dir exists BEFORE any store touches files
    data_dir: Path = settings.resolve_data_dir()
    logger = setup_logging(settings, data_dir)
    stores = open_stores(data_dir)
    if settings.seed_demo:
        seed_demo_products(stores)
    channel = ChangeChannel(stores.changes)
    inventory = InventoryCoordinator(
        stores.products,
        stores.orders,
        channel,
        low_stock_threshold=settings.low_stock_threshold,
    )
    logger.info("Storefront data dir: %s", data_dir)
    return AppState(
        settings=settings,
        stores=stores,
        sessions=SessionStore(ttl=settings.session_ttl),
        channel=channel,
        inventory=inventory,
        logger=logger,
    )


def get_state(request: Request) -> AppState:
    state = getattr(request.app.state, "app_state", None)
    if state is None:
        raise RuntimeError("AppState not initialized")
    return state


def init_app_state(app: FastAPI, settings: Settings | None = None) -> AppState:
    """Idempotently attach AppState to the FastAPI instance."""

    if getattr(app.state, "app_state", None) is None:
        app.state.app_state = init_state(settings or Settings())
    return app.state.app_state
