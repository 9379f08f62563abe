"""Run the feed publisher: ``python -m es_atompub``."""
from __future__ import annotations

import sys

import uvicorn

from es_atompub.adapters.fastapi import build_app
from es_atompub.config import ConfigError, load_settings
from es_atompub.observability.logging import JsonLoggerFactory, get_logger


def main() -> int:
    JsonLoggerFactory.configure()
    logger = get_logger("es_atompub")

    logger.info("reading config from the environment")
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("error reading configuration from environment", error=exc.message)
        return 1

    JsonLoggerFactory.configure(settings.log_level)
    logger.info("configuration", **settings.safe_dict())

    app = build_app(settings)
    logger.info("start server", listen=settings.listenaddr)
    uvicorn.run(app, host=settings.listen_host, port=settings.listen_port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
