"""Tests for service-account file defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from kubepeers.infra.kubernetes.service_account import ServiceAccount
from kubepeers.infra.kubernetes.settings import ServiceAccountSettings

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.unit
class TestReadFiles:
    def test_token_stripped(self, service_account: ServiceAccount) -> None:
        assert service_account.read_token() == "file-token"

    def test_ca_certificate_verbatim(self, service_account: ServiceAccount, ca_pem: str) -> None:
        assert service_account.read_ca_certificate() == ca_pem

    def test_namespace_stripped(self, service_account: ServiceAccount) -> None:
        assert service_account.read_namespace() == "team-a"

    def test_missing_files(self, tmp_path: Path) -> None:
        account = ServiceAccount(
            ServiceAccountSettings(
                token_path=tmp_path / "none",
                ca_certificate_path=tmp_path / "none.crt",
                namespace_path=tmp_path / "none-ns",
                _env_file=None,  # type: ignore[call-arg]
            )
        )
        assert account.read_token() is None
        assert account.read_ca_certificate() is None
        assert account.read_namespace() is None

    def test_empty_file_is_none(self, account_dir: Path, service_account: ServiceAccount) -> None:
        (account_dir / "token").write_text("  \n", encoding="utf-8")
        assert service_account.read_token() is None

    def test_disabled(self, account_settings: ServiceAccountSettings) -> None:
        settings = account_settings.model_copy(update={"enabled": False})
        account = ServiceAccount(settings)
        assert account.read_token() is None
        assert account.read_namespace() is None

    def test_unreadable_path_propagates(self, tmp_path: Path) -> None:
        account = ServiceAccount(
            ServiceAccountSettings(token_path=tmp_path, _env_file=None)  # type: ignore[call-arg]
        )
        with pytest.raises(OSError):
            account.read_token()


@pytest.mark.unit
class TestNamespaceDefault:
    def test_kubernetes_namespace_env_first(self, service_account: ServiceAccount) -> None:
        env = {"KUBERNETES_NAMESPACE": "k8s-ns", "OPENSHIFT_BUILD_NAMESPACE": "os-ns"}
        assert service_account.namespace_default(env) == "k8s-ns"

    def test_openshift_namespace_second(self, service_account: ServiceAccount) -> None:
        assert service_account.namespace_default({"OPENSHIFT_BUILD_NAMESPACE": "os-ns"}) == "os-ns"

    def test_file_third(self, service_account: ServiceAccount) -> None:
        assert service_account.namespace_default({}) == "team-a"

    def test_literal_default_last(self, tmp_path: Path) -> None:
        account = ServiceAccount(
            ServiceAccountSettings(
                namespace_path=tmp_path / "missing",
                _env_file=None,  # type: ignore[call-arg]
            )
        )
        assert account.namespace_default({}) == "default"


@pytest.mark.unit
class TestDefaults:
    def test_keys(self, service_account: ServiceAccount) -> None:
        defaults = service_account.defaults({})
        assert set(defaults) == {"api-token", "ca-certificate", "namespace"}

    def test_lazy_callables(self, service_account: ServiceAccount, account_dir: Path) -> None:
        defaults = service_account.defaults({})
        (account_dir / "token").write_text("rotated", encoding="utf-8")
        token_default = defaults["api-token"]
        assert callable(token_default)
        assert token_default() == "rotated"

    def test_namespace_uses_given_environment(self, service_account: ServiceAccount) -> None:
        defaults = service_account.defaults({"KUBERNETES_NAMESPACE": "given"})
        namespace_default = defaults["namespace"]
        assert callable(namespace_default)
        assert namespace_default() == "given"
