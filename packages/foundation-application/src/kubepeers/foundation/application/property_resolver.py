"""Multi-source property resolution.

Resolution chain, highest precedence first:
  1. Explicit configuration mapping, under the canonical key
  2. System property, under ``prefix + key``
  3. Environment variable, under the uppercased/underscored ``prefix + key``
  4. Supplied default
  5. Absent

The first source holding a value wins and later sources are not consulted.
The winning value is converted per the definition's PropertyType. A value
that does not convert raises TypeConversionError; it is never replaced by
the default.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from kubepeers.foundation.application.sources import get_system_properties, snapshot
from kubepeers.foundation.domain.exceptions import TypeConversionError
from kubepeers.foundation.domain.kubernetes_properties import (
    KUBERNETES_PROPERTIES,
    KUBERNETES_SYSTEM_PREFIX,
)
from kubepeers.foundation.domain.property_types import PropertyValue

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from kubepeers.foundation.domain.property_definition import PropertyDefinition
    from kubepeers.foundation.domain.registry import PropertyRegistry

logger = logging.getLogger(__name__)

DefaultValue = PropertyValue | Callable[[], PropertyValue | None] | None
"""A default: a raw or typed value, or a zero-argument callable producing one."""


class PropertySource(StrEnum):
    """Where a resolved value came from."""

    EXPLICIT = "explicit"
    SYSTEM_PROPERTY = "system-property"
    ENVIRONMENT = "environment"
    DEFAULT = "default"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedValue:
    """Result of resolving one property.

    Attributes:
        definition: The property that was resolved.
        value: Converted value, or None when absent.
        source: Which source supplied the value.
        raw: The winning value before conversion, or None when absent.
    """

    definition: PropertyDefinition
    value: PropertyValue | None
    source: PropertySource
    raw: PropertyValue | None = None

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def is_absent(self) -> bool:
        return self.source is PropertySource.NONE

    def value_or(self, fallback: PropertyValue) -> PropertyValue:
        """Return the resolved value, or ``fallback`` when absent."""
        return fallback if self.value is None else self.value


class PropertyResolver:
    """Resolves property definitions against snapshotted sources.

    All three sources are copied into read-only views when the resolver is
    built, so instances hold no mutable state and can be shared between
    threads.

    Args:
        explicit: Explicit configuration keyed by canonical key. Values may
            be raw strings or already-typed values.
        system_properties: System-property table. Empty when omitted.
        environment: Environment variables. Empty when omitted.
        prefix: Prefix used to derive system-property and environment names.
        registry: Catalog used by ``resolve_key`` and ``resolve_all``.
    """

    def __init__(
        self,
        explicit: Mapping[str, PropertyValue | None] | None = None,
        system_properties: Mapping[str, str] | None = None,
        environment: Mapping[str, str] | None = None,
        *,
        prefix: str = KUBERNETES_SYSTEM_PREFIX,
        registry: PropertyRegistry = KUBERNETES_PROPERTIES,
    ) -> None:
        self._explicit = snapshot(explicit)
        self._system_properties = snapshot(system_properties)
        self._environment = snapshot(environment)
        self._prefix = prefix
        self._registry = registry

    @classmethod
    def from_process(
        cls,
        explicit: Mapping[str, PropertyValue | None] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        prefix: str = KUBERNETES_SYSTEM_PREFIX,
        registry: PropertyRegistry = KUBERNETES_PROPERTIES,
    ) -> PropertyResolver:
        """Build a resolver over the process's system properties and environment.

        Args:
            explicit: Explicit configuration keyed by canonical key.
            environ: Environment to snapshot. Defaults to ``os.environ``.
            prefix: Prefix used to derive source names.
            registry: Catalog of recognised keys.
        """
        return cls(
            explicit,
            get_system_properties(),
            os.environ if environ is None else environ,
            prefix=prefix,
            registry=registry,
        )

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def registry(self) -> PropertyRegistry:
        return self._registry

    @property
    def environment(self) -> Mapping[str, str]:
        """Read-only snapshot of the environment this resolver consults."""
        return self._environment

    def resolve(
        self,
        definition: PropertyDefinition,
        default: DefaultValue = None,
    ) -> ResolvedValue:
        """Resolve the effective value of ``definition``.

        Args:
            definition: Property to resolve.
            default: Value used when no source supplies one. A callable is
                only invoked once resolution falls through to the default.

        Returns:
            ResolvedValue with the converted value and its source, or an
            absent ResolvedValue if nothing supplied a value.

        Raises:
            TypeConversionError: If the winning value does not convert to
                the definition's type.
        """
        for source, raw in self._candidates(definition):
            if raw is not None:
                return self._converted(definition, raw, source)

        if callable(default):
            default = default()
        if default is not None:
            return self._converted(definition, default, PropertySource.DEFAULT)

        logger.debug(
            "property_absent",
            extra={"key": definition.key},
        )
        return ResolvedValue(definition=definition, value=None, source=PropertySource.NONE)

    def resolve_key(
        self,
        key: str,
        default: DefaultValue = None,
    ) -> ResolvedValue:
        """Resolve a property by canonical key.

        Raises:
            UnknownKeyError: If the key is not in the registry.
            TypeConversionError: If the winning value does not convert.
        """
        return self.resolve(self._registry.lookup(key), default)

    def resolve_all(
        self,
        defaults: Mapping[str, DefaultValue] | None = None,
    ) -> dict[str, ResolvedValue]:
        """Resolve every registered property, in registry order.

        Args:
            defaults: Defaults keyed by canonical key.

        Returns:
            Mapping of canonical key to ResolvedValue.
        """
        defaults = defaults or {}
        return {
            definition.key: self.resolve(definition, defaults.get(definition.key))
            for definition in self._registry
        }

    def _candidates(
        self, definition: PropertyDefinition
    ) -> Iterator[tuple[PropertySource, PropertyValue | None]]:
        # Generator keeps lower-precedence sources unread once one matches.
        yield PropertySource.EXPLICIT, self._explicit.get(definition.key)
        yield (
            PropertySource.SYSTEM_PROPERTY,
            self._system_properties.get(definition.system_property_name(self._prefix)),
        )
        yield (
            PropertySource.ENVIRONMENT,
            self._environment.get(definition.environment_variable_name(self._prefix)),
        )

    def _converted(
        self,
        definition: PropertyDefinition,
        raw: PropertyValue,
        source: PropertySource,
    ) -> ResolvedValue:
        try:
            value = definition.value_type.coerce(raw, key=definition.key, source=source.value)
        except TypeConversionError:
            logger.warning(
                "property_conversion_failed",
                extra={
                    "key": definition.key,
                    "source": source.value,
                    "expected_type": definition.value_type.value,
                },
            )
            raise

        logger.debug(
            "property_resolved",
            extra={"key": definition.key, "source": source.value},
        )
        return ResolvedValue(definition=definition, value=value, source=source, raw=raw)
