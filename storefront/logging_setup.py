# Copyright (C) 2025 Storefront Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""File logging for the ``storefront`` logger tree.

Every module logs through ``logging.getLogger(__name__)``, so one rotating
handler on the package logger collects the store, inventory and stream
messages in the data directory next to the JSON files.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from storefront.settings import Settings

LOGGER_NAME = "storefront"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(settings: Settings, data_dir: Path) -> logging.Logger:
    log_path = data_dir / settings.log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    # create_app may run more than once per process (tests, reload)
    target = os.path.abspath(log_path)
    if any(isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in logger.handlers):
        return logger

    handler = RotatingFileHandler(
        log_path, maxBytes=settings.log_max_bytes, backupCount=settings.log_backups, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
