"""Derive system-property and environment-variable names from a canonical key.

System properties use the prefixed key verbatim
(``hazelcast.kubernetes.service-dns``). Container platforms hand out
environment variables in C-identifier style, so the environment name is the
same prefixed key uppercased with dots and dashes turned into underscores
(``HAZELCAST_KUBERNETES_SERVICE_DNS``).

Keys are validated when they are defined, so these functions assume
``[a-z0-9-]`` input.
"""

from __future__ import annotations

_ENV_TRANSLATION = str.maketrans({".": "_", "-": "_"})


def system_property_name(key: str, prefix: str) -> str:
    """Return ``prefix + key`` with no case change."""
    return f"{prefix}{key}"


def environment_variable_name(key: str, prefix: str) -> str:
    """Return the uppercased ``prefix + key`` with ``.`` and ``-`` replaced by ``_``.

    Example:
        >>> environment_variable_name("service-dns", "hazelcast.kubernetes.")
        'HAZELCAST_KUBERNETES_SERVICE_DNS'
    """
    return f"{prefix}{key}".upper().translate(_ENV_TRANSLATION)
