"""Configuration keys of the Kubernetes discovery plugin.

Every key can be set in three places, consulted in this order:

1. The explicit configuration mapping, under the canonical key::

       {"service-dns": "my-svc.my-namespace.svc.cluster.local"}

2. A system property, under ``KUBERNETES_SYSTEM_PREFIX + key``::

       -Dhazelcast.kubernetes.service-dns=my-svc.my-namespace.svc.cluster.local

3. An environment variable. Kubernetes and OpenShift provide environment
   variables in C-identifier style, so the prefixed key is uppercased and
   dots and dashes become underscores::

       HAZELCAST_KUBERNETES_SERVICE_DNS=my-svc.my-namespace.svc.cluster.local

``KUBERNETES_DEFAULTS`` holds the static defaults. The API token, CA
certificate and namespace defaults are read from the service-account files
mounted into every pod, see ``kubepeers.infra.kubernetes``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from kubepeers.foundation.domain.property_definition import define
from kubepeers.foundation.domain.property_types import PropertyType
from kubepeers.foundation.domain.registry import PropertyRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kubepeers.foundation.domain.property_types import PropertyValue

KUBERNETES_SYSTEM_PREFIX = "hazelcast.kubernetes."
"""Prefix of system properties and (after transformation) environment variables."""

DEFAULT_KUBERNETES_MASTER = "https://kubernetes.default.svc"

SERVICE_DNS = define("service-dns", PropertyType.STRING)
"""DNS service lookup domain, e.g. ``my-svc.my-namespace.svc.cluster.local``."""

SERVICE_DNS_TIMEOUT = define("service-dns-timeout", PropertyType.INTEGER)
"""DNS service lookup timeout in seconds. Defaults to 5."""

SERVICE_NAME = define("service-name", PropertyType.STRING)
"""Service name to look up through the Kubernetes endpoints API."""

SERVICE_LABEL_NAME = define("service-label-name", PropertyType.STRING)
"""Service label to look up through the Kubernetes endpoints API."""

SERVICE_LABEL_VALUE = define("service-label-value", PropertyType.STRING)
"""Service label value to look up through the Kubernetes endpoints API."""

NAMESPACE = define("namespace", PropertyType.STRING)
"""Namespace of the application pod."""

RESOLVE_NOT_READY_ADDRESSES = define("resolve-not-ready-addresses", PropertyType.BOOLEAN)
"""Whether addresses of pods that are not ready are discovered as well."""

USE_NODE_NAME_AS_EXTERNAL_ADDRESS = define(
    "use-node-name-as-external-address", PropertyType.BOOLEAN
)
"""Use the node name as external address instead of querying ``/nodes``. Defaults to false."""

KUBERNETES_API_RETRIES = define("kubernetes-api-retries", PropertyType.INTEGER)
"""Number of retries against the Kubernetes API. Defaults to 3."""

KUBERNETES_MASTER_URL = define("kubernetes-master", PropertyType.STRING)
"""Alternative address of the Kubernetes master. Defaults to ``https://kubernetes.default.svc``."""

KUBERNETES_API_TOKEN = define("api-token", PropertyType.STRING)
"""OAuth token for the Kubernetes REST API. Defaults to the service-account token file."""

KUBERNETES_CA_CERTIFICATE = define("ca-certificate", PropertyType.STRING)
"""CA certificate of the Kubernetes master. Defaults to the service-account ``ca.crt`` file."""

SERVICE_PORT = define("service-port", PropertyType.INTEGER)
"""Endpoint port of the service. Only used when greater than 0."""

KUBERNETES_PROPERTIES = PropertyRegistry(
    [
        SERVICE_DNS,
        SERVICE_DNS_TIMEOUT,
        SERVICE_NAME,
        SERVICE_LABEL_NAME,
        SERVICE_LABEL_VALUE,
        NAMESPACE,
        RESOLVE_NOT_READY_ADDRESSES,
        USE_NODE_NAME_AS_EXTERNAL_ADDRESS,
        KUBERNETES_API_RETRIES,
        KUBERNETES_MASTER_URL,
        KUBERNETES_API_TOKEN,
        KUBERNETES_CA_CERTIFICATE,
        SERVICE_PORT,
    ]
)
"""Process-wide catalog of every recognised discovery key."""

KUBERNETES_DEFAULTS: Mapping[str, PropertyValue] = MappingProxyType(
    {
        SERVICE_DNS_TIMEOUT.key: 5,
        RESOLVE_NOT_READY_ADDRESSES.key: False,
        USE_NODE_NAME_AS_EXTERNAL_ADDRESS.key: False,
        KUBERNETES_API_RETRIES.key: 3,
        KUBERNETES_MASTER_URL.key: DEFAULT_KUBERNETES_MASTER,
        SERVICE_PORT.key: 0,
    }
)
"""Static defaults keyed by canonical key."""
