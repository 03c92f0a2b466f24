"""Kubepeers Infra Observability — structlog logging with secret redaction."""

from __future__ import annotations

from kubepeers.infra.observability.logging import (
    LoggingSettings,
    SensitiveDataProcessor,
    StructlogForwardingHandler,
    configure_logging,
    get_logger,
)

__all__ = [
    "LoggingSettings",
    "SensitiveDataProcessor",
    "StructlogForwardingHandler",
    "configure_logging",
    "get_logger",
]
