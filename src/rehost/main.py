from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import uvicorn
from pydantic import ValidationError

from rehost._version import __version__
from rehost.domain.exceptions import RehostError
from rehost.infrastructure.config import LOG_LEVELS, Settings, get_settings
from rehost.infrastructure.config_file import load_config
from rehost.infrastructure.listener import bind_socket
from rehost.interface.app import create_app
from rehost.interface.dependencies import build_content_store

logger = logging.getLogger("rehost")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rehost",
        description="Serve files assembled from a TOML config over HTTP.",
    )
    parser.add_argument("config", help="Path to the .toml config file")
    parser.add_argument("-H", "--host", help="Host IP address to bind to (default 0.0.0.0)")
    parser.add_argument("-p", "--port", type=int, help="Host port number to bind to (default 8000)")
    parser.add_argument(
        "-o",
        "--override",
        action="store_true",
        default=None,
        help="Override config vars with env vars",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Overlay the CLI flags that were given onto the env-derived settings."""
    base = base or get_settings()
    update = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("override", args.override),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    return base.model_copy(update=update)


def main(argv: Sequence[str] | None = None) -> int:
    """Assemble the content store, bind, then serve until interrupted."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    try:
        settings = resolve_settings(args)
    except ValidationError as exc:
        logger.error("Invalid settings: %s", exc)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    try:
        config = load_config(args.config)
        store = asyncio.run(build_content_store(config, settings))
        sock = bind_socket(settings.host, settings.port)
    except RehostError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    logger.info("Listening on %s:%d", settings.host, settings.port)
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(store),
            log_level=settings.log_level.lower(),
        )
    )
    # uvicorn handles SIGINT/SIGTERM: stop accepting, let in-flight requests finish.
    server.run(sockets=[sock])
    return 0


if __name__ == "__main__":
    sys.exit(main())
