"""Service-account configuration settings.

Loaded from environment variables with KUBEPEERS_SERVICE_ACCOUNT_ prefix.
Follows Pydantic BaseSettings pattern for type-safe configuration.

Environment Variables:
    KUBEPEERS_SERVICE_ACCOUNT_ENABLED: Read defaults from the mounted files
    KUBEPEERS_SERVICE_ACCOUNT_TOKEN_PATH: API token file
    KUBEPEERS_SERVICE_ACCOUNT_CA_CERTIFICATE_PATH: CA certificate file
    KUBEPEERS_SERVICE_ACCOUNT_NAMESPACE_PATH: Pod namespace file
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


class ServiceAccountSettings(BaseSettings):
    """Locations of the service-account files Kubernetes mounts into every pod.

    Example:
        >>> settings = ServiceAccountSettings()
        >>> str(settings.token_path)
        '/var/run/secrets/kubernetes.io/serviceaccount/token'
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBEPEERS_SERVICE_ACCOUNT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Read api-token, ca-certificate and namespace defaults from files",
    )
    token_path: Path = Field(
        default=SERVICE_ACCOUNT_DIR / "token",
        description="File holding the service-account API token",
    )
    ca_certificate_path: Path = Field(
        default=SERVICE_ACCOUNT_DIR / "ca.crt",
        description="File holding the Kubernetes master CA certificate",
    )
    namespace_path: Path = Field(
        default=SERVICE_ACCOUNT_DIR / "namespace",
        description="File holding the pod namespace",
    )


@lru_cache(maxsize=1)
def get_service_account_settings() -> ServiceAccountSettings:
    """Get singleton ServiceAccountSettings instance.

    Clear cache with ``get_service_account_settings.cache_clear()`` for testing.
    """
    return ServiceAccountSettings()
