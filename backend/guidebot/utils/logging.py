# /guidebot/utils/logging.py

import logging
import sys
from typing import Dict, List

import structlog
from guidebot.config.settings import settings

# Resolver logs go out as JSON lines (console output in development), each
# record stamped with the service, environment and API version it came from.

SERVICE_NAME = "guidebot"
HANDLER_NAME = "guidebot-structlog"

# Third-party loggers that are noisy at INFO.
QUIET_LOGGERS: Dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "pymongo": logging.WARNING,
    "pymongo.topology": logging.WARNING,
}


def add_service_context(logger, method_name, event_dict):
    """structlog processor: tags every record with where it was emitted."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.environment)
    event_dict.setdefault("api_version", settings.api_version)
    return event_dict


def _pre_chain() -> List:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer():
    if settings.environment == "development":
        return structlog.dev.ConsoleRenderer()
    # Korean labels and messages stay readable in the JSON output.
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def resolve_log_level() -> int:
    """LOG_LEVEL wins; otherwise DEBUG in development and INFO elsewhere."""
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.environment == "development" else logging.INFO


def setup_logging() -> logging.Handler:
    """
    Routes structlog and plain `logging` module loggers through one stdout
    handler. Safe to call once per lifespan: a handler installed by an
    earlier call is replaced, never duplicated.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=_renderer(), foreign_pre_chain=pre_chain))

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(resolve_log_level())

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    return handler
