"""Kubepeers Infra Kubernetes — service-account defaults and process config loading."""

from __future__ import annotations

from kubepeers.infra.kubernetes.loader import load_discovery_config
from kubepeers.infra.kubernetes.service_account import NAMESPACE_ENV_VARS, ServiceAccount
from kubepeers.infra.kubernetes.settings import (
    SERVICE_ACCOUNT_DIR,
    ServiceAccountSettings,
    get_service_account_settings,
)

__all__ = [
    "NAMESPACE_ENV_VARS",
    "SERVICE_ACCOUNT_DIR",
    "ServiceAccount",
    "ServiceAccountSettings",
    "get_service_account_settings",
    "load_discovery_config",
]
