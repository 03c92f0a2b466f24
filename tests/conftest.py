"""Shared fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from kubepeers.foundation.application.sources import get_system_properties
from kubepeers.infra.kubernetes.service_account import ServiceAccount
from kubepeers.infra.kubernetes.settings import ServiceAccountSettings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture()
def pod_service_account(tmp_path: Path) -> ServiceAccount:
    """Service account whose files look like a real pod mount."""
    (tmp_path / "token").write_text("pod-token", encoding="utf-8")
    (tmp_path / "ca.crt").write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")
    (tmp_path / "namespace").write_text("hazelcast", encoding="utf-8")
    return ServiceAccount(
        ServiceAccountSettings(
            token_path=tmp_path / "token",
            ca_certificate_path=tmp_path / "ca.crt",
            namespace_path=tmp_path / "namespace",
            _env_file=None,  # type: ignore[call-arg]
        )
    )


@pytest.fixture()
def fresh_system_properties() -> Iterator[None]:
    """Re-read KUBEPEERS_OPTS for the duration of a test."""
    get_system_properties.cache_clear()
    yield
    get_system_properties.cache_clear()
