"""
FinFlow - server entry point.

    python -m finflow.main

Runs the API under uvicorn. On SIGINT/SIGTERM uvicorn stops accepting
connections and waits up to SERVER_SHUTDOWN_TIMEOUT seconds for in-flight
requests before closing.
"""

from __future__ import annotations

import logging

import uvicorn

from finflow.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info(f"Listening on {settings.api_host}:{settings.port}")

    uvicorn.run(
        "finflow.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.port,
        timeout_keep_alive=settings.server_idle_timeout,
        timeout_graceful_shutdown=settings.server_shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    main()
