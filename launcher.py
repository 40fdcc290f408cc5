# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import argparse
import os
import sys

import uvicorn

from storefront import get_version
from storefront.settings import Settings


def main(argv: list[str] | None = None) -> int:
    settings = Settings()

    parser = argparse.ArgumentParser(description="Run the storefront web server")
    parser.add_argument("--dev", action="store_true", help="Reload on code changes")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to run on")
    parser.add_argument("--version", action="version", version=f"storefront {get_version()}")
    # Parse known args to tolerate extra args if any
    args, _unknown = parser.parse_known_args(argv)

    force_dev = args.dev or os.environ.get("STOREFRONT_DEV") == "1"
    if force_dev:
        print("--- DEV MODE: reload enabled ---")
        uvicorn.run("storefront.api.http:create_app", factory=True, host=args.host, port=args.port, reload=True)
        return 0

    uvicorn.run(
        "storefront.api.http:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level="info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
