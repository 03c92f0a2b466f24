"""Immutable property definitions.

A ``PropertyDefinition`` names a configuration key and the type its value
converts to. Validation occurs at construction time so a malformed catalog
fails at startup rather than on first lookup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from kubepeers.foundation.domain.exceptions import InvalidKeyError
from kubepeers.foundation.domain.naming import environment_variable_name, system_property_name
from kubepeers.foundation.domain.property_types import PropertyType

_KEY_PATTERN = re.compile(r"^[a-z0-9-]+$")


def _validate_key(key: str) -> None:
    if not key:
        raise InvalidKeyError(key, "key must not be empty")
    if any(ch.isspace() for ch in key):
        raise InvalidKeyError(key, "key must not contain whitespace")
    if any(ch.isupper() for ch in key):
        raise InvalidKeyError(key, "key must be lowercase")
    if "_" in key:
        # Underscores only appear in derived environment variable names.
        raise InvalidKeyError(key, "key must not contain underscores")
    if not _KEY_PATTERN.match(key):
        raise InvalidKeyError(key, "key may only contain [a-z0-9-]")


@dataclass(frozen=True, slots=True)
class PropertyDefinition:
    """A recognised configuration key and its value type.

    Attributes:
        key: Canonical dashed lowercase identifier (e.g. ``service-dns``).
        value_type: Conversion applied to raw string input.
        multi_valued: Whether the key may resolve to zero-or-more values.
            Reserved: resolution always uses single-value semantics.

    Raises:
        InvalidKeyError: If the key is empty or contains characters outside
            ``[a-z0-9-]``.
    """

    key: str
    value_type: PropertyType
    multi_valued: bool = True

    def __post_init__(self) -> None:
        _validate_key(self.key)
        if not isinstance(self.value_type, PropertyType):
            raise TypeError(f"value_type must be a PropertyType, got {self.value_type!r}")

    def system_property_name(self, prefix: str) -> str:
        """System property under which this key may be overridden."""
        return system_property_name(self.key, prefix)

    def environment_variable_name(self, prefix: str) -> str:
        """Environment variable under which this key may be overridden."""
        return environment_variable_name(self.key, prefix)


def define(
    key: str,
    value_type: PropertyType,
    multi_valued: bool = True,
) -> PropertyDefinition:
    """Construct and validate a property definition.

    Args:
        key: Canonical dashed lowercase key.
        value_type: Type the raw value converts to.
        multi_valued: Reserved flag, ``True`` for every catalog key.

    Returns:
        The validated PropertyDefinition.

    Raises:
        InvalidKeyError: If the key is malformed.
    """
    return PropertyDefinition(key=key, value_type=value_type, multi_valued=multi_valued)
