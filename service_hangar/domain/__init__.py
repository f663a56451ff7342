"""Domain layer: value objects, exceptions, events, contracts and discovery."""

from .exceptions import (
    ConfigurationError,
    DiscoveryError,
    HangarError,
    PreconditionError,
    ProviderLoadError,
    RegistryLoadError,
    ValidationError,
)
from .value_objects import LoaderContext, ProviderHandle, service_group, service_name

__all__ = [
    "ConfigurationError",
    "DiscoveryError",
    "HangarError",
    "LoaderContext",
    "PreconditionError",
    "ProviderHandle",
    "ProviderLoadError",
    "RegistryLoadError",
    "ValidationError",
    "service_group",
    "service_name",
]
