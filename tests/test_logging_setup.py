# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from storefront.logging_setup import LOGGER_NAME, setup_logging
from storefront.settings import Settings


@pytest.fixture()
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def test_handler_follows_settings(tmp_path, clean_logger):
    settings = Settings(log_file="shop.log", log_level="warning", log_max_bytes=1024, log_backups=1)

    logger = setup_logging(settings, tmp_path)

    assert logger is clean_logger
    assert logger.level == logging.WARNING
    [handler] = [h for h in _file_handlers(logger) if h.baseFilename == str(tmp_path / "shop.log")]
    assert handler.maxBytes == 1024
    assert handler.backupCount == 1


def test_repeated_setup_adds_one_handler(tmp_path, clean_logger):
    settings = Settings()
    before = len(_file_handlers(clean_logger))

    setup_logging(settings, tmp_path)
    setup_logging(settings, tmp_path)

    assert len(_file_handlers(clean_logger)) == before + 1


def test_module_loggers_write_to_data_dir(tmp_path, clean_logger):
    setup_logging(Settings(), tmp_path)

    logging.getLogger("storefront.records.store").info("hello from the store")
    for handler in _file_handlers(clean_logger):
        handler.flush()

    text = (tmp_path / "storefront.log").read_text(encoding="utf-8")
    assert "[INFO] storefront.records.store: hello from the store" in text
