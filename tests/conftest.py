# Copyright (C) 2025 Storefront Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront.changes import ChangeChannel
from storefront.inventory import InventoryCoordinator
from storefront.records import open_stores
from storefront.sessions import SessionStore

WIDGET = {"id": 1, "name": "Widget", "price": 9.99, "stock": 3}
FIXED_NOW = 1_700_000_000


@pytest.fixture()
def stores(tmp_path):
    return open_stores(tmp_path / "data")


@pytest.fixture()
def sessions():
    return SessionStore()


@pytest.fixture()
def ctx(sessions):
    return sessions.open(None)


@pytest.fixture()
def channel(stores):
    return ChangeChannel(stores.changes)


@pytest.fixture()
def coordinator(stores, channel):
    stores.products.write_all([dict(WIDGET)])
    return InventoryCoordinator(stores.products, stores.orders, channel, clock=lambda: FIXED_NOW)


@pytest.fixture()
def app_client(tmp_path):
    from storefront.api.http import create_app
    from storefront.settings import Settings

    settings = Settings(home=str(tmp_path / "home"), seed_demo=False, sse_interval=0.05)
    app = create_app(settings)
    app.state.app_state.stores.products.write_all(
        [dict(WIDGET), {"id": 2, "name": "Gadget", "price": 24.5, "stock": 12}]
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def widget():
    return dict(WIDGET)
