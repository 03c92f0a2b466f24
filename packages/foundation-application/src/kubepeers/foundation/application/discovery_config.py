"""Typed, validated configuration handed to the Kubernetes discovery client.

``KubernetesDiscoveryConfig`` resolves every catalog key once and freezes the
result. The discovery client receives this object explicitly instead of
reading properties itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from kubepeers.foundation.application.property_resolver import PropertyResolver, PropertySource
from kubepeers.foundation.domain.exceptions import InvalidConfigurationError
from kubepeers.foundation.domain.kubernetes_properties import (
    KUBERNETES_API_RETRIES,
    KUBERNETES_API_TOKEN,
    KUBERNETES_CA_CERTIFICATE,
    KUBERNETES_DEFAULTS,
    KUBERNETES_MASTER_URL,
    NAMESPACE,
    RESOLVE_NOT_READY_ADDRESSES,
    SERVICE_DNS,
    SERVICE_DNS_TIMEOUT,
    SERVICE_LABEL_NAME,
    SERVICE_LABEL_VALUE,
    SERVICE_NAME,
    SERVICE_PORT,
    USE_NODE_NAME_AS_EXTERNAL_ADDRESS,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kubepeers.foundation.application.property_resolver import DefaultValue
    from kubepeers.foundation.domain.property_types import PropertyValue

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


class DiscoveryMode(StrEnum):
    """How the discovery client locates peers."""

    DNS_LOOKUP = "dns_lookup"
    KUBERNETES_API = "kubernetes_api"


@dataclass(frozen=True)
class KubernetesDiscoveryConfig:
    """Resolved discovery configuration.

    Secrets (``api_token``, ``ca_certificate``) are excluded from ``repr``;
    use ``to_log_dict()`` for logging.

    Raises:
        InvalidConfigurationError: If the values are inconsistent (see
            ``_validate``).
    """

    service_dns: str | None = None
    service_dns_timeout: int = 5
    service_name: str | None = None
    service_label_name: str | None = None
    service_label_value: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    resolve_not_ready_addresses: bool = False
    use_node_name_as_external_address: bool = False
    kubernetes_api_retries: int = 3
    kubernetes_master: str = "https://kubernetes.default.svc"
    api_token: str | None = field(default=None, repr=False)
    ca_certificate: str | None = field(default=None, repr=False)
    service_port: int = 0
    sources: Mapping[str, PropertySource] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    def __post_init__(self) -> None:
        self._validate()

    @property
    def mode(self) -> DiscoveryMode:
        """DNS lookup when ``service-dns`` is set, Kubernetes API otherwise."""
        if self.service_dns:
            return DiscoveryMode.DNS_LOOKUP
        return DiscoveryMode.KUBERNETES_API

    @property
    def effective_service_port(self) -> int | None:
        """Service port override, or None when not set to a positive value."""
        return self.service_port if self.service_port > 0 else None

    @classmethod
    def from_resolver(
        cls,
        resolver: PropertyResolver,
        defaults: Mapping[str, DefaultValue] | None = None,
    ) -> KubernetesDiscoveryConfig:
        """Resolve every catalog key and build the config.

        Args:
            resolver: Resolver holding the explicit, system-property and
                environment sources.
            defaults: Extra defaults keyed by canonical key, layered over
                ``KUBERNETES_DEFAULTS`` (e.g. service-account file readers).

        Raises:
            TypeConversionError: If any source holds an unconvertible value.
            InvalidConfigurationError: If the resolved values are inconsistent.
        """
        merged: dict[str, DefaultValue] = {**KUBERNETES_DEFAULTS, **(defaults or {})}
        merged.setdefault(NAMESPACE.key, DEFAULT_NAMESPACE)
        resolved = resolver.resolve_all(merged)

        def value(key: str) -> Any:
            return resolved[key].value

        config = cls(
            service_dns=value(SERVICE_DNS.key),
            service_dns_timeout=cast("int", value(SERVICE_DNS_TIMEOUT.key)),
            service_name=value(SERVICE_NAME.key),
            service_label_name=value(SERVICE_LABEL_NAME.key),
            service_label_value=value(SERVICE_LABEL_VALUE.key),
            namespace=cast("str", value(NAMESPACE.key)),
            resolve_not_ready_addresses=cast("bool", value(RESOLVE_NOT_READY_ADDRESSES.key)),
            use_node_name_as_external_address=cast(
                "bool", value(USE_NODE_NAME_AS_EXTERNAL_ADDRESS.key)
            ),
            kubernetes_api_retries=cast("int", value(KUBERNETES_API_RETRIES.key)),
            kubernetes_master=cast("str", value(KUBERNETES_MASTER_URL.key)),
            api_token=value(KUBERNETES_API_TOKEN.key),
            ca_certificate=value(KUBERNETES_CA_CERTIFICATE.key),
            service_port=cast("int", value(SERVICE_PORT.key)),
            sources=MappingProxyType({key: rv.source for key, rv in resolved.items()}),
        )
        logger.info("discovery_config_loaded", extra=config.to_log_dict())
        return config

    @classmethod
    def load(
        cls,
        explicit: Mapping[str, PropertyValue | None] | None = None,
        system_properties: Mapping[str, str] | None = None,
        environment: Mapping[str, str] | None = None,
        defaults: Mapping[str, DefaultValue] | None = None,
    ) -> KubernetesDiscoveryConfig:
        """Resolve the config from explicitly supplied sources.

        Args:
            explicit: Explicit configuration keyed by canonical key.
            system_properties: System-property table.
            environment: Environment variables.
            defaults: Extra defaults layered over ``KUBERNETES_DEFAULTS``.
        """
        resolver = PropertyResolver(explicit, system_properties, environment)
        return cls.from_resolver(resolver, defaults)

    def to_log_dict(self) -> dict[str, Any]:
        """Loggable view of the config with secrets reduced to presence flags."""
        return {
            "mode": self.mode.value,
            "service_dns": self.service_dns,
            "service_dns_timeout": self.service_dns_timeout,
            "service_name": self.service_name,
            "service_label_name": self.service_label_name,
            "service_label_value": self.service_label_value,
            "namespace": self.namespace,
            "resolve_not_ready_addresses": self.resolve_not_ready_addresses,
            "use_node_name_as_external_address": self.use_node_name_as_external_address,
            "kubernetes_api_retries": self.kubernetes_api_retries,
            "kubernetes_master": self.kubernetes_master,
            "api_token_present": self.api_token is not None,
            "ca_certificate_present": self.ca_certificate is not None,
            "service_port": self.effective_service_port,
        }

    def _validate(self) -> None:
        if self.service_dns and (
            self.service_name or self.service_label_name or self.service_label_value
        ):
            raise InvalidConfigurationError(
                "properties 'service-dns' and ('service-name' or 'service-label-name') "
                "cannot be defined at the same time",
                keys=[SERVICE_DNS.key, SERVICE_NAME.key, SERVICE_LABEL_NAME.key],
            )
        if self.service_name and (self.service_label_name or self.service_label_value):
            raise InvalidConfigurationError(
                "properties 'service-name' and 'service-label-name' "
                "cannot be defined at the same time",
                keys=[SERVICE_NAME.key, SERVICE_LABEL_NAME.key],
            )
        if bool(self.service_label_name) != bool(self.service_label_value):
            raise InvalidConfigurationError(
                "properties 'service-label-name' and 'service-label-value' "
                "must be defined together",
                keys=[SERVICE_LABEL_NAME.key, SERVICE_LABEL_VALUE.key],
            )
        for key, number in (
            (SERVICE_DNS_TIMEOUT.key, self.service_dns_timeout),
            (KUBERNETES_API_RETRIES.key, self.kubernetes_api_retries),
            (SERVICE_PORT.key, self.service_port),
        ):
            if number < 0:
                raise InvalidConfigurationError(
                    f"property '{key}' cannot be a negative number",
                    keys=[key],
                    value=number,
                )
        if self.mode is DiscoveryMode.KUBERNETES_API and not self.api_token:
            raise InvalidConfigurationError(
                f"property '{KUBERNETES_API_TOKEN.key}' is required for Kubernetes API discovery",
                keys=[KUBERNETES_API_TOKEN.key],
            )
