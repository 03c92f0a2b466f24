"""Shared fixtures for infra-kubernetes tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from kubepeers.infra.kubernetes.service_account import ServiceAccount
from kubepeers.infra.kubernetes.settings import ServiceAccountSettings

if TYPE_CHECKING:
    from pathlib import Path

CA_PEM = "-----BEGIN CERTIFICATE-----\nMIIC\n-----END CERTIFICATE-----\n"


@pytest.fixture()
def account_dir(tmp_path: Path) -> Path:
    """A directory laid out like a mounted service account."""
    (tmp_path / "token").write_text("file-token\n", encoding="utf-8")
    (tmp_path / "ca.crt").write_text(CA_PEM, encoding="utf-8")
    (tmp_path / "namespace").write_text("team-a\n", encoding="utf-8")
    return tmp_path


@pytest.fixture()
def account_settings(account_dir: Path) -> ServiceAccountSettings:
    return ServiceAccountSettings(
        token_path=account_dir / "token",
        ca_certificate_path=account_dir / "ca.crt",
        namespace_path=account_dir / "namespace",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture()
def service_account(account_settings: ServiceAccountSettings) -> ServiceAccount:
    return ServiceAccount(account_settings)


@pytest.fixture()
def ca_pem() -> str:
    return CA_PEM
