"""Run the signaling relay with uvicorn."""
from __future__ import annotations

import logging

import uvicorn

from .core.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("Starting signaling server on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "rendezvous.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
