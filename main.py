"""Development entrypoint for the army book HTTP API.

Bind address defaults come from ``ARMYBOOK_API_HOST`` / ``ARMYBOOK_API_PORT``.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

import uvicorn

from armybook.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Serve faction army books over HTTP")
    parser.add_argument("--host", default=settings.api_host, help="Host interface to bind")
    parser.add_argument("--port", type=int, default=settings.api_port, help="TCP port")
    parser.add_argument(
        "--data-dir",
        help="Directory of faction JSON files (overrides ARMYBOOK_DATA_DIR)",
    )
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.data_dir:
        os.environ["ARMYBOOK_DATA_DIR"] = args.data_dir
        get_settings.cache_clear()

    uvicorn.run(
        "armybook.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=get_settings().log_level.lower(),
    )


if __name__ == "__main__":
    main()
