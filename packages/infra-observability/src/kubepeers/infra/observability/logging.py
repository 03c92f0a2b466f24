"""Structured logging configuration using structlog.

Kubepeers library modules log through the standard ``logging`` module with
snake_case event names and structured ``extra`` fields, e.g.::

    logger.debug("property_resolved", extra={"key": "namespace", "source": "default"})

``configure_logging()`` sets up structlog for the embedding application and
forwards records of the ``kubepeers`` logger hierarchy into it, so both end
up in one stream with:

- JSON output for production environments
- Console output with colors for development
- Redaction of tokens, certificates and other secrets

Usage:
    # During application startup
    from kubepeers.infra.observability.logging import configure_logging
    configure_logging()

    # In application code
    from kubepeers.infra.observability import get_logger
    logger = get_logger(__name__)
    logger.info("peers_discovered", count=3)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

Processor = structlog.types.Processor

LIBRARY_LOGGER_NAME = "kubepeers"

SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "token",
        "api_token",
        "authorization",
        "bearer",
        "secret",
        "credential",
        "ca_certificate",
        "certificate",
    }
)

SENSITIVE_SUBSTRINGS: tuple[str, ...] = ("password", "token", "secret", "certificate")

REDACTED_VALUE: str = "***REDACTED***"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class LoggingSettings(BaseSettings):
    """Logging configuration settings from environment variables.

    - LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment name (development, staging, production, test)

    Example:
        >>> LoggingSettings(log_level="debug", environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Minimum log level to output",
    )
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Environment name for format selection",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level.

        Raises:
            ValueError: If log level is not a valid Python logging level.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {valid_levels}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        """JSON logs in production, console logs elsewhere."""
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


class SensitiveDataProcessor:
    """Structlog processor that redacts secret values from the event dict.

    A field is redacted when its lowercased name is in SENSITIVE_FIELDS or
    contains one of SENSITIVE_SUBSTRINGS (e.g. ``kubernetes_api_token``).
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict.keys()):
            if is_sensitive(key):
                event_dict[key] = REDACTED_VALUE
        return event_dict


def is_sensitive(field_name: str) -> bool:
    """Return True if values logged under ``field_name`` must be redacted."""
    name = field_name.lower()
    if name in SENSITIVE_FIELDS:
        return True
    # Presence flags such as ``api_token_present`` carry no secret.
    if name.endswith("_present"):
        return False
    return any(part in name for part in SENSITIVE_SUBSTRINGS)


class StructlogForwardingHandler(logging.Handler):
    """Forward stdlib log records into structlog.

    The record message becomes the structlog event and every ``extra``
    field becomes a key of the event dict, so redaction applies to it.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            fields = {
                key: value
                for key, value in vars(record).items()
                if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
            }
            bound = structlog.get_logger().bind(logger=record.name)
            bound.log(record.levelno, record.getMessage(), **fields)
        except Exception:
            self.handleError(record)


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.
    """
    return LoggingSettings()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and route the ``kubepeers`` stdlib loggers into it.

    Should be called once during application startup. Calling it again
    replaces the forwarding handler rather than adding a second one.

    Args:
        settings: Optional LoggingSettings instance. If not provided,
            settings are loaded from environment variables.
    """
    if settings is None:
        settings = get_logging_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
        structlog.processors.format_exc_info,
    ]

    if settings.use_json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for handler in list(library_logger.handlers):
        if isinstance(handler, StructlogForwardingHandler):
            library_logger.removeHandler(handler)
    library_logger.addHandler(StructlogForwardingHandler())
    library_logger.setLevel(settings.log_level_int)
    library_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.typing.WrappedLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically __name__ from calling module).
            If None, returns unbound logger.
    """
    logger = structlog.get_logger()
    if name is not None:
        logger = logger.bind(logger=name)
    return logger
