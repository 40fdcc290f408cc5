# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

from datetime import datetime

from storefront.notifications import FLASH_MESSAGES_KEY, NOTIFICATIONS_KEY, NotificationService
from storefront.sessions import SessionStore


def test_flash_messages_are_read_once():
    notices = NotificationService({})
    notices.add_flash("first")
    notices.add_flash("second")

    assert notices.pop_flashes() == ["first", "second"]
    assert notices.pop_flashes() == []


def test_send_overwrites_per_product():
    notices = NotificationService({})
    notices.send(1, "old")
    notices.send(1, "new")
    notices.send(2, "other")

    assert notices.get_all() == {1: "new", 2: "other"}
    # reading does not clear
    assert notices.get_all() == {1: "new", 2: "other"}

    notices.clear()
    assert notices.get_all() == {}


def test_low_stock_alert_text():
    notices = NotificationService({})
    notices.send_low_stock_alert(3, "Widget", datetime(2025, 1, 2, 3, 4, 5))

    assert notices.get_all() == {3: "Product with name Widget has low stock. 2025-01-02 03:04:05"}


def test_session_keys_initialised_lazily():
    session = {}
    notices = NotificationService(session)
    assert session == {}

    notices.get_all()

    assert session == {NOTIFICATIONS_KEY: {}, FLASH_MESSAGES_KEY: []}


def test_has_content_ignores_empty_keys():
    notices = NotificationService({})
    notices.clear()
    assert notices.has_content() is False

    notices.add_flash("hi")
    assert notices.has_content() is True

    notices.pop_flashes()
    notices.send(1, "low")
    assert notices.has_content() is True


def test_session_store_reuses_kept_token(sessions):
    first = sessions.open(None)
    first.notices.add_flash("hello")
    assert sessions.keep(first) is True

    again = sessions.open(first.session_id)
    stranger = sessions.open("unknown-token")

    assert first.created is True
    assert again.created is False
    assert again.notices.pop_flashes() == ["hello"]
    assert stranger.created is True
    assert stranger.session_id != "unknown-token"
    assert len(sessions) == 1


def test_empty_new_sessions_are_not_registered(sessions):
    for _ in range(50):
        ctx = sessions.open(None)
        ctx.notices.clear()
        assert sessions.keep(ctx) is False

    assert len(sessions) == 0


def test_known_session_is_not_kept_twice(sessions):
    ctx = sessions.open(None)
    ctx.notices.add_flash("hello")
    sessions.keep(ctx)

    again = sessions.open(ctx.session_id)

    assert sessions.keep(again) is False
    assert len(sessions) == 1


def test_idle_sessions_expire():
    now = [0.0]
    sessions = SessionStore(ttl=60, clock=lambda: now[0])
    idle = sessions.open(None)
    idle.notices.add_flash("idle")
    sessions.keep(idle)
    busy = sessions.open(None)
    busy.notices.add_flash("busy")
    sessions.keep(busy)

    now[0] = 45.0
    sessions.open(busy.session_id)
    now[0] = 90.0
    reopened = sessions.open(idle.session_id)

    assert reopened.created is True
    assert reopened.session_id != idle.session_id
    assert sessions.open(busy.session_id).created is False
    assert len(sessions) == 1
