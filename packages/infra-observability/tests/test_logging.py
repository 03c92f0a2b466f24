"""Unit tests for kubepeers.infra.observability.logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog

from kubepeers.infra.observability.logging import (
    LIBRARY_LOGGER_NAME,
    REDACTED_VALUE,
    LoggingSettings,
    SensitiveDataProcessor,
    StructlogForwardingHandler,
    configure_logging,
    get_logger,
    get_logging_settings,
    is_sensitive,
)


@pytest.fixture()
def reset_library_logger() -> Iterator[logging.Logger]:
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    saved = (list(library_logger.handlers), library_logger.level, library_logger.propagate)
    yield library_logger
    library_logger.handlers[:] = saved[0]
    library_logger.setLevel(saved[1])
    library_logger.propagate = saved[2]
    structlog.reset_defaults()


class TestLoggingSettings:
    @pytest.mark.unit
    def test_default_values(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = LoggingSettings()
            assert settings.log_level == "INFO"
            assert settings.environment == "development"

    @pytest.mark.unit
    def test_use_json_logs(self) -> None:
        assert LoggingSettings(environment="production").use_json_logs is True
        assert LoggingSettings(environment="development").use_json_logs is False

    @pytest.mark.unit
    def test_normalize_log_level_lowercase(self) -> None:
        settings = LoggingSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.log_level_int == logging.DEBUG

    @pytest.mark.unit
    def test_invalid_log_level(self) -> None:
        with pytest.raises(Exception):  # noqa: B017
            LoggingSettings(log_level="INVALID")

    @pytest.mark.unit
    def test_from_env_vars(self) -> None:
        env = {"LOG_LEVEL": "WARNING", "ENVIRONMENT": "production"}
        with patch.dict("os.environ", env, clear=True):
            settings = LoggingSettings()
            assert settings.log_level == "WARNING"
            assert settings.environment == "production"


class TestSensitiveDataProcessor:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field", ["api_token", "ca_certificate", "TOKEN", "kubernetes_api_token", "password"]
    )
    def test_redacts(self, field: str) -> None:
        processor = SensitiveDataProcessor()
        result = processor(None, "info", {"event": "e", field: "secret"})
        assert result[field] == REDACTED_VALUE

    @pytest.mark.unit
    def test_preserves_non_sensitive(self) -> None:
        processor = SensitiveDataProcessor()
        result = processor(None, "info", {"event": "e", "namespace": "prod"})
        assert result["namespace"] == "prod"

    @pytest.mark.unit
    def test_presence_flags_not_redacted(self) -> None:
        assert is_sensitive("api_token_present") is False
        assert is_sensitive("ca_certificate_present") is False


class TestConfigureLogging:
    @pytest.mark.unit
    def test_configure_with_default_settings(
        self, reset_library_logger: logging.Logger
    ) -> None:
        with patch.dict("os.environ", {}, clear=True):
            get_logging_settings.cache_clear()
            configure_logging()
        get_logging_settings.cache_clear()

    @pytest.mark.unit
    def test_installs_single_forwarding_handler(
        self, reset_library_logger: logging.Logger
    ) -> None:
        settings = LoggingSettings(log_level="DEBUG", environment="production")
        configure_logging(settings)
        configure_logging(settings)
        handlers = [
            h for h in reset_library_logger.handlers if isinstance(h, StructlogForwardingHandler)
        ]
        assert len(handlers) == 1
        assert reset_library_logger.level == logging.DEBUG
        assert reset_library_logger.propagate is False

    @pytest.mark.unit
    def test_library_records_forwarded_and_redacted(
        self,
        reset_library_logger: logging.Logger,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        configure_logging(LoggingSettings(log_level="DEBUG", environment="production"))
        logging.getLogger("kubepeers.test").info(
            "discovery_config_loaded",
            extra={"namespace": "prod", "api_token": "s3cr3t"},
        )
        out = capsys.readouterr().out
        assert "discovery_config_loaded" in out
        assert '"namespace": "prod"' in out
        assert "s3cr3t" not in out
        assert REDACTED_VALUE in out


class TestGetLogger:
    @pytest.mark.unit
    def test_returns_bound_logger(self, reset_library_logger: logging.Logger) -> None:
        configure_logging(LoggingSettings(log_level="DEBUG"))
        assert get_logger("test.module") is not None

    @pytest.mark.unit
    def test_returns_unbound_logger_when_no_name(
        self, reset_library_logger: logging.Logger
    ) -> None:
        configure_logging(LoggingSettings(log_level="DEBUG"))
        assert get_logger() is not None
