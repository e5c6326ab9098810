"""MCP server entry point for the Stripe fraud tools.

Run from the repo root::

    python -m src.main
    python -m src.main --transport streamable-http --port 8020
"""

import argparse

from src.api.server import create_server
from src.config import Settings, settings
from src.shared.errors import ConfigurationError
from src.shared.logging import get_logger, setup_logging

logger = get_logger()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Stripe fraud MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http", "sse"],
        default=None,
        help="MCP transport (default: TRANSPORT env var or stdio)",
    )
    parser.add_argument("--host", default=None, help="Host for HTTP transports")
    parser.add_argument("--port", type=int, default=None, help="Port for HTTP transports")
    parser.add_argument(
        "--log-level", choices=["debug", "info", "warn", "error"], default=None, help="Minimum log level"
    )
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    base = base or settings
    overrides = {
        key: value
        for key, value in {
            "transport": args.transport,
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    return base.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> None:
    cfg = resolve_settings(parse_args(argv))
    setup_logging(cfg.log_level)

    try:
        server = create_server(cfg)
    except ConfigurationError as exc:
        logger.error("invalid_configuration", error_message=str(exc))
        raise SystemExit(2) from exc

    logger.info("stripe_mcp_starting", transport=cfg.transport, host=cfg.host, port=cfg.port)
    server.run(transport=cfg.transport)


if __name__ == "__main__":
    main()
