"""Property error hierarchy for type-safe error handling.

Every failure raised while declaring or resolving discovery configuration
derives from ``PropertyError``. Exceptions carry a machine-readable error
code and structured context so callers can log them consistently.

Example:
    >>> from kubepeers.foundation.domain.exceptions import UnknownKeyError
    >>> raise UnknownKeyError("service-dnz")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "InvalidConfigurationError",
    "InvalidKeyError",
    "PropertyError",
    "TypeConversionError",
    "UnknownKeyError",
]


class PropertyError(Exception):
    """Base class for all configuration property errors.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable error description.
        context: Structured debugging information (key, source, raw value).

    Example:
        >>> raise PropertyError("Resolution failed", context={"key": "namespace"})
        PropertyError: Resolution failed (key=namespace)
    """

    error_code: str = "PROPERTY_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize property error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class InvalidKeyError(PropertyError):
    """Raised when a property key is malformed or defined twice.

    Happens while the catalog is being built, so it is fatal at startup.

    Attributes:
        error_code: "INVALID_PROPERTY_KEY" (class constant).
        key: The rejected key.
        reason: Why the key was rejected.

    Example:
        >>> raise InvalidKeyError("Service-DNS", "must be lowercase")
        InvalidKeyError: Invalid property key 'Service-DNS': must be lowercase
    """

    error_code: str = "INVALID_PROPERTY_KEY"

    def __init__(self, key: str, reason: str) -> None:
        """Initialize invalid key error.

        Args:
            key: The rejected key.
            reason: Human-readable rejection reason.
        """
        self.key = key
        self.reason = reason
        message = f"Invalid property key {key!r}: {reason}"
        super().__init__(message, {"key": key, "reason": reason})


class UnknownKeyError(PropertyError):
    """Raised when a key is looked up that the catalog does not define.

    Attributes:
        error_code: "UNKNOWN_PROPERTY_KEY" (class constant).
        key: The key that was looked up.

    Example:
        >>> raise UnknownKeyError("service-dnz")
        UnknownKeyError: Unknown property key: service-dnz
    """

    error_code: str = "UNKNOWN_PROPERTY_KEY"

    def __init__(self, key: str, **extra_context: Any) -> None:
        """Initialize unknown key error.

        Args:
            key: The key that was looked up.
            **extra_context: Additional debugging context.
        """
        self.key = key
        message = f"Unknown property key: {key}"
        super().__init__(message, {"key": key, **extra_context})


class TypeConversionError(PropertyError):
    """Raised when a raw value cannot be converted to the declared type.

    The message names the key, the source that supplied the value and the
    raw value itself. The value is never silently replaced by a default.

    Attributes:
        error_code: "PROPERTY_TYPE_CONVERSION" (class constant).
        key: Canonical property key.
        source: Source tag that supplied the raw value (e.g. "environment").
        raw_value: The offending raw string.
        expected_type: Declared value type (e.g. "integer").

    Example:
        >>> raise TypeConversionError("kubernetes-api-retries", "environment", "abc", "integer")
    """

    error_code: str = "PROPERTY_TYPE_CONVERSION"

    def __init__(
        self,
        key: str,
        source: str,
        raw_value: str,
        expected_type: str,
    ) -> None:
        """Initialize type conversion error.

        Args:
            key: Canonical property key.
            source: Source tag that supplied the raw value.
            raw_value: The offending raw string.
            expected_type: Declared value type.
        """
        self.key = key
        self.source = source
        self.raw_value = raw_value
        self.expected_type = expected_type
        message = (
            f"Cannot convert value {raw_value!r} of property {key!r} "
            f"from {source} to {expected_type}"
        )
        context = {
            "key": key,
            "source": source,
            "raw_value": raw_value,
            "expected_type": expected_type,
        }
        super().__init__(message, context)


class InvalidConfigurationError(PropertyError):
    """Raised when resolved values are individually valid but inconsistent.

    Attributes:
        error_code: "INVALID_DISCOVERY_CONFIGURATION" (class constant).
        reason: Description of the conflict.

    Example:
        >>> raise InvalidConfigurationError(
        ...     "service-dns cannot be combined with service-name",
        ...     keys=["service-dns", "service-name"],
        ... )
    """

    error_code: str = "INVALID_DISCOVERY_CONFIGURATION"

    def __init__(self, reason: str, **context: Any) -> None:
        """Initialize invalid configuration error.

        Args:
            reason: Description of the conflicting configuration.
            **context: Additional debugging context (e.g., keys involved).
        """
        self.reason = reason
        message = f"Invalid discovery configuration: {reason}"
        super().__init__(message, context)
