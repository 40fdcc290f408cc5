# SPDX-License-Identifier: AGPL-3.0-or-later
"""Session-scoped user messages.

Two kinds live side by side in a session mapping:

* low-stock notifications, keyed by product id, kept until cleared;
* flash messages, an ordered list drained by the first read.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, MutableMapping, Optional

NOTIFICATIONS_KEY = "notifications"
FLASH_MESSAGES_KEY = "flash_messages"


class NotificationService:
    def __init__(self, session: MutableMapping):
        self.session = session

    def _ensure(self) -> None:
        self.session.setdefault(NOTIFICATIONS_KEY, {})
        self.session.setdefault(FLASH_MESSAGES_KEY, [])

    def has_content(self) -> bool:
        return bool(self.session.get(NOTIFICATIONS_KEY)) or bool(self.session.get(FLASH_MESSAGES_KEY))

    # --- low-stock notifications ---------------------------------------------

    def send(self, product_id: int, message: str) -> None:
        self._ensure()
        self.session[NOTIFICATIONS_KEY][product_id] = message

    def send_low_stock_alert(self, product_id: int, product_name: str, when: Optional[datetime] = None) -> None:
        stamp = (when or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        self.send(product_id, f"Product with name {product_name} has low stock. {stamp}")

    def get_all(self) -> Dict[int, str]:
        self._ensure()
        return dict(self.session[NOTIFICATIONS_KEY])

    def clear(self) -> None:
        self._ensure()
        self.session[NOTIFICATIONS_KEY] = {}

    # --- flash messages ------------------------------------------------------

    def add_flash(self, message: str) -> None:
        self._ensure()
        self.session[FLASH_MESSAGES_KEY].append(message)

    def pop_flashes(self) -> List[str]:
        """Return every queued flash message and forget them."""

        self._ensure()
        messages = self.session[FLASH_MESSAGES_KEY]
        self.session[FLASH_MESSAGES_KEY] = []
        return list(messages)


__all__ = ["FLASH_MESSAGES_KEY", "NOTIFICATIONS_KEY", "NotificationService"]
