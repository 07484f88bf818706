"""Structured logging configuration with stdlib bridge.

Configures structlog with:
- JSON output for production (log aggregator queryable)
- ConsoleRenderer for dev mode (human-readable, colored)
- Stdlib bridge so logs from host frameworks share the same renderer
- Redaction of credential fields that may ride along in user data
"""

import logging
import logging.config

import structlog

from onboarding.core.config import get_settings

REDACTED_KEYS = frozenset({"password"})


def redact_sensitive_fields(logger, method, event_dict):
    """Mask credential values, including inside a bound ``user_data`` mapping."""
    for key in REDACTED_KEYS & event_dict.keys():
        event_dict[key] = "***"

    user_data = event_dict.get("user_data")
    if isinstance(user_data, dict) and REDACTED_KEYS & user_data.keys():
        event_dict["user_data"] = {
            k: ("***" if k in REDACTED_KEYS else v) for k, v in user_data.items()
        }
    return event_dict


def configure_structlog(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog with stdlib bridge for full JSON output.

    Call this once at process start, before the first log call
    (structlog caches the processor chain on first use).

    Args:
        log_level: Root log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_logs: True for JSON output (production), False for ConsoleRenderer (dev)
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_sensitive_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": log_level},
    })

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings() -> None:
    """Configure logging from the cached application settings."""
    settings = get_settings()
    configure_structlog(log_level=settings.log_level, json_logs=settings.json_logs)
