"""File-backed defaults from the pod's service account.

Kubernetes mounts the API token, the master CA certificate and the pod
namespace into every container. These files supply the defaults of
``api-token``, ``ca-certificate`` and ``namespace``. Each file is read only
when resolution actually falls through to its default.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kubepeers.foundation.application.discovery_config import DEFAULT_NAMESPACE
from kubepeers.foundation.domain.kubernetes_properties import (
    KUBERNETES_API_TOKEN,
    KUBERNETES_CA_CERTIFICATE,
    NAMESPACE,
)
from kubepeers.infra.kubernetes.settings import get_service_account_settings

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from kubepeers.foundation.application.property_resolver import DefaultValue
    from kubepeers.infra.kubernetes.settings import ServiceAccountSettings

logger = logging.getLogger(__name__)

NAMESPACE_ENV_VARS: tuple[str, ...] = ("KUBERNETES_NAMESPACE", "OPENSHIFT_BUILD_NAMESPACE")
"""Platform variables consulted for the namespace before the namespace file."""


class ServiceAccount:
    """Reader for the mounted service-account files.

    Args:
        settings: File locations. Loaded from the environment when omitted.
    """

    def __init__(self, settings: ServiceAccountSettings | None = None) -> None:
        self._settings = settings or get_service_account_settings()

    def read_token(self) -> str | None:
        """Return the API token, or None if the file is missing or empty."""
        return self._read(self._settings.token_path, strip=True)

    def read_ca_certificate(self) -> str | None:
        """Return the PEM CA certificate, or None if the file is missing or empty."""
        return self._read(self._settings.ca_certificate_path, strip=False)

    def read_namespace(self) -> str | None:
        """Return the pod namespace, or None if the file is missing or empty."""
        return self._read(self._settings.namespace_path, strip=True)

    def namespace_default(self, environment: Mapping[str, str]) -> str:
        """Namespace fallback chain.

        ``KUBERNETES_NAMESPACE`` -> ``OPENSHIFT_BUILD_NAMESPACE`` -> namespace
        file -> ``"default"``.
        """
        for name in NAMESPACE_ENV_VARS:
            value = environment.get(name)
            if value:
                return value
        return self.read_namespace() or DEFAULT_NAMESPACE

    def defaults(self, environment: Mapping[str, str]) -> dict[str, DefaultValue]:
        """Lazy defaults keyed by canonical key.

        Args:
            environment: Environment snapshot used for the namespace fallback.
        """
        return {
            KUBERNETES_API_TOKEN.key: self.read_token,
            KUBERNETES_CA_CERTIFICATE.key: self.read_ca_certificate,
            NAMESPACE.key: lambda: self.namespace_default(environment),
        }

    def _read(self, path: Path, *, strip: bool) -> str | None:
        if not self._settings.enabled:
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("service_account_file_missing", extra={"path": str(path)})
            return None
        if strip:
            content = content.strip()
        return content or None
