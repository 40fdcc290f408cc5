# Copyright (C) 2025 Storefront Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Storefront: product listing, order placement and live low-stock alerts."""

from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "storefront"
# matches [project].version for source checkouts that were never installed
SOURCE_VERSION = "0.1.0"

__all__ = ["DIST_NAME", "get_version"]


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return SOURCE_VERSION
