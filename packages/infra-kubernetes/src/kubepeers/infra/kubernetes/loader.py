"""Load the discovery configuration from the running process."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from kubepeers.foundation.application.discovery_config import KubernetesDiscoveryConfig
from kubepeers.foundation.application.property_resolver import PropertyResolver
from kubepeers.foundation.application.sources import get_system_properties
from kubepeers.infra.kubernetes.service_account import ServiceAccount

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kubepeers.foundation.domain.property_types import PropertyValue


def load_discovery_config(
    explicit: Mapping[str, PropertyValue | None] | None = None,
    *,
    system_properties: Mapping[str, str] | None = None,
    environment: Mapping[str, str] | None = None,
    service_account: ServiceAccount | None = None,
) -> KubernetesDiscoveryConfig:
    """Resolve the discovery config with process sources and pod defaults.

    Args:
        explicit: Explicit configuration keyed by canonical key.
        system_properties: System-property table. Defaults to the
            process-wide table from ``KUBEPEERS_OPTS``.
        environment: Environment variables. Defaults to ``os.environ``.
        service_account: Reader for service-account defaults.

    Returns:
        The validated KubernetesDiscoveryConfig.

    Raises:
        TypeConversionError: If a source holds an unconvertible value.
        InvalidConfigurationError: If the resolved values are inconsistent.
    """
    resolver = PropertyResolver(
        explicit,
        get_system_properties() if system_properties is None else system_properties,
        os.environ if environment is None else environment,
    )
    account = service_account or ServiceAccount()
    return KubernetesDiscoveryConfig.from_resolver(
        resolver, account.defaults(resolver.environment)
    )
