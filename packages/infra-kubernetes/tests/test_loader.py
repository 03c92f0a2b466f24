"""Tests for load_discovery_config."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from kubepeers.foundation.application.discovery_config import DiscoveryMode
from kubepeers.foundation.application.property_resolver import PropertySource
from kubepeers.foundation.application.sources import get_system_properties
from kubepeers.foundation.domain.exceptions import InvalidConfigurationError
from kubepeers.infra.kubernetes.loader import load_discovery_config
from kubepeers.infra.kubernetes.service_account import ServiceAccount


@pytest.mark.unit
class TestLoadDiscoveryConfig:
    def test_file_defaults(self, service_account: ServiceAccount, ca_pem: str) -> None:
        config = load_discovery_config(
            system_properties={}, environment={}, service_account=service_account
        )
        assert config.api_token == "file-token"
        assert config.ca_certificate == ca_pem
        assert config.namespace == "team-a"
        assert config.mode is DiscoveryMode.KUBERNETES_API
        assert config.sources["api-token"] is PropertySource.DEFAULT

    def test_explicit_token_skips_file(self) -> None:
        account = MagicMock(spec=ServiceAccount)
        account.defaults.return_value = {
            "api-token": account.read_token,
            "ca-certificate": account.read_ca_certificate,
            "namespace": lambda: "default",
        }
        account.read_ca_certificate.return_value = None

        config = load_discovery_config(
            {"api-token": "explicit"},
            system_properties={},
            environment={},
            service_account=account,
        )
        assert config.api_token == "explicit"
        account.read_token.assert_not_called()

    def test_environment_overrides_files(self, service_account: ServiceAccount) -> None:
        config = load_discovery_config(
            system_properties={},
            environment={
                "HAZELCAST_KUBERNETES_NAMESPACE": "env-ns",
                "HAZELCAST_KUBERNETES_SERVICE_DNS_TIMEOUT": "10",
            },
            service_account=service_account,
        )
        assert config.namespace == "env-ns"
        assert config.service_dns_timeout == 10
        assert config.sources["service-dns-timeout"] is PropertySource.ENVIRONMENT

    def test_platform_namespace_variable(self, service_account: ServiceAccount) -> None:
        config = load_discovery_config(
            system_properties={},
            environment={"KUBERNETES_NAMESPACE": "platform-ns"},
            service_account=service_account,
        )
        assert config.namespace == "platform-ns"

    def test_process_sources(self, service_account: ServiceAccount) -> None:
        env = {
            "KUBEPEERS_OPTS": "-Dhazelcast.kubernetes.service-port=5701",
            "HAZELCAST_KUBERNETES_SERVICE_NAME": "hazelcast",
        }
        get_system_properties.cache_clear()
        try:
            with patch.dict("os.environ", env):
                config = load_discovery_config(service_account=service_account)
        finally:
            get_system_properties.cache_clear()
        assert config.effective_service_port == 5701
        assert config.sources["service-port"] is PropertySource.SYSTEM_PROPERTY
        assert config.service_name == "hazelcast"

    def test_missing_token_rejected(self) -> None:
        account = MagicMock(spec=ServiceAccount)
        account.defaults.return_value = {}
        with pytest.raises(InvalidConfigurationError, match="api-token"):
            load_discovery_config(system_properties={}, environment={}, service_account=account)
