"""Kubepeers Foundation Application — property resolution and discovery configuration."""

from kubepeers.foundation.application.discovery_config import (
    DEFAULT_NAMESPACE,
    DiscoveryMode,
    KubernetesDiscoveryConfig,
)
from kubepeers.foundation.application.property_resolver import (
    DefaultValue,
    PropertyResolver,
    PropertySource,
    ResolvedValue,
)
from kubepeers.foundation.application.sources import (
    SYSTEM_PROPERTIES_ENV_VAR,
    SystemProperties,
    get_system_properties,
    parse_system_properties,
    snapshot,
)

__all__ = [
    "DEFAULT_NAMESPACE",
    "SYSTEM_PROPERTIES_ENV_VAR",
    "DefaultValue",
    "DiscoveryMode",
    "KubernetesDiscoveryConfig",
    "PropertyResolver",
    "PropertySource",
    "ResolvedValue",
    "SystemProperties",
    "get_system_properties",
    "parse_system_properties",
    "snapshot",
]
