# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings
from platformdirs import PlatformDirs


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8765
    home: str | None = Field(default=None, alias="STOREFRONT_HOME")
    session_cookie_name: str = "shop_session"
    same_site: str = "lax"
    secure_cookie: bool = False
    # idle seconds before a session is forgotten
    session_ttl: float = 24 * 60

    log_file: str = "storefront.log"
    log_level: str = "INFO"
    log_max_bytes: int = 5_000_000
    log_backups: int = 3

    low_stock_threshold: int = 5
    # seconds between SSE wakeups when nothing changed
    sse_interval: float = 5.0
    sse_always_emit: bool = False
    seed_demo: bool = True

    # Version-agnostic config for pydantic-settings 2.x
    model_config = {
        "env_prefix": "STOREFRONT_",
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def dirs(self) -> PlatformDirs:
        return PlatformDirs(appname="storefront", appauthor="storefront", ensure_exists=True)

    def resolve_data_dir(self) -> Path:
        base = Path(self.home) if self.home else Path(self.dirs().user_data_path)
        base.mkdir(parents=True, exist_ok=True)
        return base
