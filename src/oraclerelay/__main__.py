"""Command line entry point: ``python -m oraclerelay``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from oraclerelay.client import OracleRelay
from oraclerelay.config import RelaySettings, get_settings
from oraclerelay.core.exceptions import ConfigurationError

logger = logging.getLogger("oraclerelay")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # web3 and httpx log every request at INFO/DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oraclerelay",
        description="Relay credit score requests from the chain to IPFS and back.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")

    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the poller and the HTTP API")
    serve.add_argument("--host", default=None, help="Host to bind (default: from settings)")
    serve.add_argument("--port", type=int, default=None, help="Port to bind (default: from settings)")

    subparsers.add_parser("run", help="Run the poller only")

    return parser


def serve(settings: RelaySettings, host: str | None, port: int | None) -> None:
    import uvicorn

    from oraclerelay.api.app import create_app

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


async def run_headless(settings: RelaySettings) -> None:
    """Poll until interrupted."""
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Not supported on Windows event loops.
            pass

    async with OracleRelay(settings) as relay:
        await relay.start()
        await stop.wait()
        logger.info("Shutting down...")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    try:
        if args.command == "run":
            asyncio.run(run_headless(settings))
        else:
            serve(settings, getattr(args, "host", None), getattr(args, "port", None))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
