"""Structured logging configuration."""

import logging
import sys
from pythonjsonlogger import jsonlogger
from agency_ai.infra.config import config

SERVICE_NAME = "agency-ai"

# Third-party loggers kept at WARNING
QUIET_LOGGERS = ("sqlalchemy", "httpx", "httpcore", "openai")


def setup_logging(level=None):
    """
    Configure JSON logging on the ``agency_ai`` logger.

    Modules log through ``logging.getLogger(__name__)`` and propagate here.
    Each record carries the service name and environment.
    """
    logger = logging.getLogger("agency_ai")
    if level is None:
        level = logging.DEBUG if config.DEBUG else logging.INFO
    logger.setLevel(level)
    logger.handlers = []

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"service": SERVICE_NAME, "env": config.APP_ENV},
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


app_logger = setup_logging()
