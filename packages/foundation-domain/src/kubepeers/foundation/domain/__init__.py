"""Kubepeers Foundation Domain -- pure Python configuration primitives.

This package declares what the Kubernetes discovery plugin can be
configured with: property types, validated definitions, the immutable key
catalog, the naming transform and the error hierarchy.
"""

from kubepeers.foundation.domain.exceptions import (
    InvalidConfigurationError,
    InvalidKeyError,
    PropertyError,
    TypeConversionError,
    UnknownKeyError,
)
from kubepeers.foundation.domain.kubernetes_properties import (
    DEFAULT_KUBERNETES_MASTER,
    KUBERNETES_API_RETRIES,
    KUBERNETES_API_TOKEN,
    KUBERNETES_CA_CERTIFICATE,
    KUBERNETES_DEFAULTS,
    KUBERNETES_MASTER_URL,
    KUBERNETES_PROPERTIES,
    KUBERNETES_SYSTEM_PREFIX,
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
from kubepeers.foundation.domain.naming import environment_variable_name, system_property_name
from kubepeers.foundation.domain.property_definition import PropertyDefinition, define
from kubepeers.foundation.domain.property_types import PropertyType, PropertyValue
from kubepeers.foundation.domain.registry import PropertyRegistry

__all__ = [
    "DEFAULT_KUBERNETES_MASTER",
    "KUBERNETES_API_RETRIES",
    "KUBERNETES_API_TOKEN",
    "KUBERNETES_CA_CERTIFICATE",
    "KUBERNETES_DEFAULTS",
    "KUBERNETES_MASTER_URL",
    "KUBERNETES_PROPERTIES",
    "KUBERNETES_SYSTEM_PREFIX",
    "NAMESPACE",
    "RESOLVE_NOT_READY_ADDRESSES",
    "SERVICE_DNS",
    "SERVICE_DNS_TIMEOUT",
    "SERVICE_LABEL_NAME",
    "SERVICE_LABEL_VALUE",
    "SERVICE_NAME",
    "SERVICE_PORT",
    "USE_NODE_NAME_AS_EXTERNAL_ADDRESS",
    "InvalidConfigurationError",
    "InvalidKeyError",
    "PropertyDefinition",
    "PropertyError",
    "PropertyRegistry",
    "PropertyType",
    "PropertyValue",
    "TypeConversionError",
    "UnknownKeyError",
    "define",
    "environment_variable_name",
    "system_property_name",
]
