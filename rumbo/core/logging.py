"""
Core Logging Configuration
Logging estructurado basado en structlog
"""

import logging
import sys
from typing import Any

import structlog
from asgi_correlation_id import correlation_id

from rumbo.core.config import Settings


def add_request_id(_, __, event_dict):
    """Añade el ID de correlación de la petición en curso"""
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def configure_logging(settings: Settings) -> None:
    """
    Configura structlog y el logging estándar
    """

    # Procesadores comunes (structlog y logging estándar)
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_request_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.app_env == "dev", pad_event_to=20)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    # uvicorn y SQLAlchemy se renderizan con el mismo formato
    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"]:
        logger = logging.getLogger(_log)
        logger.handlers = []
        logger.propagate = True

    # httpx registra la URL completa de cada petición
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = None) -> Any:
    """
    Devuelve un logger estructurado
    """
    return structlog.get_logger(name)
