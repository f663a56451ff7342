"""Domain exceptions for service discovery.

All exceptions raised by the library derive from HangarError. Discovery
failures (RegistryLoadError, ProviderLoadError) are data-level problems:
they are caught inside discovery and reported through a diagnostics sink.
Only PreconditionError escapes from discover().
"""

from typing import Any


class HangarError(Exception):
    """Base exception for all service hangar errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# --- Validation ---


class ValidationError(HangarError):
    """Raised when a value fails validation."""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class PreconditionError(ValidationError):
    """Raised when discovery is called with an invalid service type or context.

    This is a caller programming error and is raised before any
    enumeration begins.
    """


class ConfigurationError(HangarError):
    """Raised when configuration is invalid or cannot be loaded."""


# --- Discovery ---


class DiscoveryError(HangarError):
    """Base exception for discovery failures."""

    def __init__(self, message: str, service: str, details: dict[str, Any] | None = None):
        details = dict(details or {})
        details["service"] = service
        super().__init__(message, details)
        self.service = service


class RegistryLoadError(DiscoveryError):
    """Raised when a context's registry for a service cannot be located or read."""

    def __init__(self, service: str, context: str, reason: str):
        super().__init__(
            f"Unable to load services for service {service}: {reason}",
            service=service,
            details={"context": context},
        )
        self.context = context
        self.reason = reason


class ProviderLoadError(DiscoveryError):
    """Raised when a single registered provider cannot be instantiated."""

    def __init__(self, service: str, provider: str, reason: str):
        super().__init__(
            f"Unable to load service class for service {service}: {reason}",
            service=service,
            details={"provider": provider},
        )
        self.provider = provider
        self.reason = reason
