"""Immutable catalog of recognised property definitions.

The registry is built once at process start and is read-only afterwards, so
it can be shared between threads without synchronization.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from kubepeers.foundation.domain.exceptions import InvalidKeyError, UnknownKeyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from kubepeers.foundation.domain.property_definition import PropertyDefinition


class PropertyRegistry:
    """Read-only mapping from canonical key to PropertyDefinition.

    Iteration yields definitions in the order they were supplied.

    Args:
        definitions: Definitions to register. Keys must be unique.

    Raises:
        InvalidKeyError: If two definitions share a key.

    Example:
        >>> registry = PropertyRegistry([define("namespace", PropertyType.STRING)])
        >>> registry.lookup("namespace").value_type
        <PropertyType.STRING: 'string'>
    """

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Iterable[PropertyDefinition]) -> None:
        by_key: dict[str, PropertyDefinition] = {}
        for definition in definitions:
            if definition.key in by_key:
                raise InvalidKeyError(definition.key, "key is defined more than once")
            by_key[definition.key] = definition
        self._definitions = MappingProxyType(by_key)

    def lookup(self, key: str) -> PropertyDefinition:
        """Return the definition for ``key``.

        Raises:
            UnknownKeyError: If the key is not part of the catalog.
        """
        definition = self._definitions.get(key)
        if definition is None:
            raise UnknownKeyError(key, known_keys=sorted(self._definitions))
        return definition

    def get(self, key: str) -> PropertyDefinition | None:
        """Return the definition for ``key``, or None if it is not registered."""
        return self._definitions.get(key)

    @property
    def keys(self) -> tuple[str, ...]:
        """Registered keys in definition order."""
        return tuple(self._definitions)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[PropertyDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"PropertyRegistry(keys={list(self._definitions)!r})"
