"""Closed set of property value types and their string conversions.

Raw property values always arrive as strings (explicit configuration,
system properties, environment variables). ``PropertyType`` decides how such
a string becomes a typed value:

- ``STRING``: returned unchanged.
- ``INTEGER``: base-10 signed integer. ``int()`` is deliberately not used
  directly since it also accepts ``"1_000"`` and non-ASCII digits.
- ``BOOLEAN``: case-insensitive ``"true"`` / ``"false"`` only.
"""

from __future__ import annotations

import re
from enum import StrEnum

from kubepeers.foundation.domain.exceptions import TypeConversionError

PropertyValue = str | int | bool
"""Typed value a property resolves to."""

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

_BOOLEAN_LITERALS: dict[str, bool] = {"true": True, "false": False}


class PropertyType(StrEnum):
    """Value type of a configuration property.

    Uses StrEnum so the type name doubles as the ``expected_type`` reported
    in conversion errors.
    """

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"

    def convert(self, raw_value: str, *, key: str, source: str) -> PropertyValue:
        """Convert a raw string into this type.

        Args:
            raw_value: Raw string supplied by a property source.
            key: Canonical property key (for error reporting).
            source: Tag of the source that supplied the value.

        Returns:
            The converted value.

        Raises:
            TypeConversionError: If the raw string is not a valid literal.
        """
        if self is PropertyType.STRING:
            return raw_value

        candidate = raw_value.strip()
        if self is PropertyType.INTEGER:
            if _INTEGER_PATTERN.match(candidate):
                return int(candidate)
        else:
            literal = _BOOLEAN_LITERALS.get(candidate.lower())
            if literal is not None:
                return literal

        raise TypeConversionError(key, source, raw_value, self.value)

    def coerce(self, value: PropertyValue, *, key: str, source: str) -> PropertyValue:
        """Accept either a raw string or an already-typed value.

        Typed values are checked against this type; ``bool`` is not accepted
        where an integer is expected.

        Raises:
            TypeConversionError: If the value has the wrong type or is an
                unparseable string.
        """
        if isinstance(value, str):
            return self.convert(value, key=key, source=source)
        if self is PropertyType.BOOLEAN and isinstance(value, bool):
            return value
        if self is PropertyType.INTEGER and isinstance(value, int) and not isinstance(value, bool):
            return value
        raise TypeConversionError(key, source, repr(value), self.value)
