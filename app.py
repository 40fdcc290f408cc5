# SPDX-License-Identifier: AGPL-3.0-or-later
"""Storefront ASGI entry point (``uvicorn app:app``)."""

from __future__ import annotations

import sys

from storefront.api.http import create_app

app = create_app()


def main() -> int:
    from launcher import main as launcher_main

    return launcher_main()


__all__ = ["app", "main"]


if __name__ == "__main__":
    sys.exit(main())
