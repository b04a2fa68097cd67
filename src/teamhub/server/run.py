"""Uvicorn launcher for the TeamHub API."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import uvicorn

from teamhub.config import get_settings

APP_PATH = "teamhub.server.app:app"

logger = logging.getLogger(__name__)


async def _run_for(server: uvicorn.Server, seconds: float) -> None:
    async def _stop_later() -> None:
        await asyncio.sleep(seconds)
        logger.info("Stopping server after %.1fs", seconds)
        server.should_exit = True

    stopper = asyncio.create_task(_stop_later())
    try:
        await server.serve()
    finally:
        stopper.cancel()


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
    duration: Optional[float] = None,
) -> None:
    """Serve the API; explicit arguments win over ``TEAMHUB_SERVER_*`` settings."""

    settings = get_settings()
    host = host or settings.server_host
    port = port or settings.server_port
    duration = duration if duration is not None else settings.server_duration

    if reload:
        if duration is not None:
            raise SystemExit("Reload cannot be combined with a bounded duration.")
        uvicorn.run(APP_PATH, host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config(APP_PATH, host=host, port=port))
    if duration is None:
        server.run()
    else:
        asyncio.run(_run_for(server, duration))


def main() -> None:
    """Entry point for the ``teamhub-server`` console script."""

    serve(reload=os.environ.get("RELOAD") == "1")


if __name__ == "__main__":
    main()
