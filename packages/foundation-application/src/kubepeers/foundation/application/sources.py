"""Read-only property source views.

The resolver never reads ``os.environ`` or the system-property table
directly. It receives snapshots taken once, so a resolution is a pure
function of its inputs and later mutation of the live tables has no effect.

System properties are process-scoped overrides supplied at launch, written
as ``-Dname=value`` arguments either on the command line or in the
``KUBEPEERS_OPTS`` environment variable::

    KUBEPEERS_OPTS="-Dhazelcast.kubernetes.service-dns=my-svc.ns.svc.cluster.local"
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

SYSTEM_PROPERTIES_ENV_VAR = "KUBEPEERS_OPTS"
"""Environment variable holding space-separated ``-Dname=value`` arguments."""

_DEFINE_FLAG = "-D"

_V = TypeVar("_V")


def snapshot(mapping: Mapping[str, _V] | None) -> Mapping[str, _V]:
    """Return a frozen, read-only copy of ``mapping`` (empty if None)."""
    return MappingProxyType(dict(mapping or {}))


def parse_system_properties(args: Iterable[str]) -> dict[str, str]:
    """Collect ``-Dname=value`` arguments into a dict.

    A bare ``-Dname`` maps to the empty string. Later definitions win, and
    arguments that do not start with ``-D`` are ignored.

    Example:
        >>> parse_system_properties(["-Da=1", "--verbose", "-Db"])
        {'a': '1', 'b': ''}
    """
    properties: dict[str, str] = {}
    for arg in args:
        if not arg.startswith(_DEFINE_FLAG) or len(arg) == len(_DEFINE_FLAG):
            continue
        name, _, value = arg[len(_DEFINE_FLAG) :].partition("=")
        if name:
            properties[name] = value
    return properties


class SystemProperties(Mapping[str, str]):
    """Immutable system-property table.

    Args:
        properties: Initial name/value pairs. Copied on construction.
    """

    __slots__ = ("_properties",)

    def __init__(self, properties: Mapping[str, str] | None = None) -> None:
        self._properties = snapshot(properties)

    @classmethod
    def from_args(cls, args: Iterable[str]) -> SystemProperties:
        """Build the table from ``-Dname=value`` launch arguments."""
        return cls(parse_system_properties(args))

    @classmethod
    def from_environment(
        cls,
        variable: str = SYSTEM_PROPERTIES_ENV_VAR,
        environ: Mapping[str, str] | None = None,
    ) -> SystemProperties:
        """Build the table from a shell-quoted environment variable.

        Args:
            variable: Name of the variable holding ``-D`` arguments.
            environ: Environment to read. Defaults to ``os.environ``.
        """
        env = os.environ if environ is None else environ
        return cls.from_args(shlex.split(env.get(variable, "")))

    def __getitem__(self, name: str) -> str:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"SystemProperties({dict(self._properties)!r})"


@lru_cache(maxsize=1)
def get_system_properties() -> SystemProperties:
    """Get the process-wide system-property table.

    Read once from ``KUBEPEERS_OPTS``. Clear the cache with
    ``get_system_properties.cache_clear()`` for testing.
    """
    return SystemProperties.from_environment()
