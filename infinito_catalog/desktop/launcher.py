#!/usr/bin/env python3
"""Desktop launcher.

Starts the local catalog server on a free port, waits until it answers,
opens the UI in the default browser and shuts the server down once the UI
stops sending heartbeats.

Usage:
    infinito-catalog
    infinito-catalog --port 3100 --no-browser
    infinito-catalog --reclaim-port
"""

import argparse
import asyncio
import webbrowser

import httpx
import structlog
import uvicorn

from infinito_catalog.api.dependencies import set_watchdog
from infinito_catalog.desktop.ports import find_free_port, reclaim_port
from infinito_catalog.desktop.watchdog import HeartbeatWatchdog
from infinito_catalog.infrastructure.config import Settings, settings
from infinito_catalog.infrastructure.logging import configure_logging

logger = structlog.get_logger()

READY_ATTEMPTS = 30
READY_DELAY = 0.5


async def wait_for_server(
    base_url: str,
    attempts: int = READY_ATTEMPTS,
    delay: float = READY_DELAY,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Poll `/api/health` until the server answers 200.

    Args:
        base_url: Server base URL.
        attempts: Maximum number of probes.
        delay: Seconds between probes.
        transport: Optional httpx transport (used by tests).

    Returns:
        True if the server became ready, False otherwise.
    """
    async with httpx.AsyncClient(timeout=1.0, transport=transport) as client:
        for attempt in range(attempts):
            try:
                response = await client.get(f"{base_url}/api/health")
                if response.status_code == 200:
                    logger.info("Server responding", url=base_url)
                    return True
            except httpx.RequestError as e:
                logger.debug("Server not ready yet", attempt=attempt + 1, error=str(e))
            if attempt < attempts - 1:
                await asyncio.sleep(delay)
    return False


async def run(config: Settings) -> int:
    """Run the server until shutdown.

    Args:
        config: Effective settings.

    Returns:
        Process exit code.
    """
    if config.reclaim_port:
        reclaim_port(config.port)

    port = find_free_port(config.host, config.port, config.port_attempts)
    base_url = f"http://{config.host}:{port}"

    server = uvicorn.Server(
        uvicorn.Config(
            "infinito_catalog.main:app",
            host=config.host,
            port=port,
            log_config=None,
        )
    )
    serve_task = asyncio.create_task(server.serve())
    logger.info("Server starting", url=base_url)

    if not await wait_for_server(base_url):
        logger.error("Server did not respond in time", url=base_url)
        server.should_exit = True
        await serve_task
        return 1

    watch_task = None
    if config.heartbeat_enabled:
        watchdog = HeartbeatWatchdog(timeout=config.heartbeat_timeout_seconds)
        set_watchdog(watchdog)

        def stop_server() -> None:
            server.should_exit = True

        watch_task = asyncio.create_task(watchdog.watch(stop_server))

    if config.open_browser:
        logger.info("Opening catalog UI", url=base_url)
        webbrowser.open(base_url)

    try:
        await serve_task
    finally:
        if watch_task is not None:
            watch_task.cancel()
        set_watchdog(None)

    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Infinito Piercing - Sistema de Catálogos",
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Interface to bind (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"First port to try (default: {settings.port})",
    )
    parser.add_argument(
        "--reclaim-port",
        action="store_true",
        default=settings.reclaim_port,
        help="Terminate whatever process listens on --port before starting",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open the UI in the browser",
    )
    parser.add_argument(
        "--no-heartbeat",
        action="store_true",
        help="Keep running when the UI stops sending heartbeats",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = settings.model_copy(
        update={
            "host": args.host,
            "port": args.port,
            "reclaim_port": args.reclaim_port,
            "open_browser": settings.open_browser and not args.no_browser,
            "heartbeat_enabled": settings.heartbeat_enabled and not args.no_heartbeat,
        }
    )

    configure_logging(config.log_level, json_output=config.log_json)
    logger.info("Starting Infinito Piercing - Sistema de Catálogos")

    return asyncio.run(run(config))


if __name__ == "__main__":
    raise SystemExit(main())
