"""Service Hangar - resilient multi-source service provider discovery.

Locates every implementation of a service contract visible from one or
more loader contexts, instantiates them, and returns one instance per
concrete class. A broken provider, or an unreadable registry, is reported
and skipped without affecting the others.

    from service_hangar import load_services

    for factory in load_services(QueueFactory, use_secondary=True):
        ...
"""

from .api import get_discovery_service, get_runtime, load_services, reset_runtime, set_runtime
from .bootstrap.runtime import create_runtime, Runtime
from .domain.contracts import IDiagnosticsSink, IRegistryResolver, ISecondaryContextProvider, NullDiagnosticsSink
from .domain.discovery import deduplicate, DiscoveryService, ProviderEnumerator
from .domain.exceptions import (
    ConfigurationError,
    DiscoveryError,
    HangarError,
    PreconditionError,
    ProviderLoadError,
    RegistryLoadError,
    ValidationError,
)
from .domain.value_objects import LoaderContext, ProviderHandle, service_group, service_name
from .infrastructure.context_provider import ContextVarSecondaryProvider, FixedSecondaryProvider, use_secondary_context
from .infrastructure.diagnostics import CompositeDiagnosticsSink, EventBusDiagnosticsSink, LoggingDiagnosticsSink
from .infrastructure.resolvers import (
    ChainedRegistryResolver,
    EntryPointRegistryResolver,
    get_static_registry,
    provides,
    StaticRegistryResolver,
)

__version__ = "0.1.0"

__all__ = [
    # API
    "load_services",
    "get_discovery_service",
    "get_runtime",
    "set_runtime",
    "reset_runtime",
    "create_runtime",
    "Runtime",
    # Discovery
    "DiscoveryService",
    "ProviderEnumerator",
    "deduplicate",
    # Value objects
    "LoaderContext",
    "ProviderHandle",
    "service_name",
    "service_group",
    # Contracts
    "IRegistryResolver",
    "IDiagnosticsSink",
    "ISecondaryContextProvider",
    "NullDiagnosticsSink",
    # Infrastructure
    "EntryPointRegistryResolver",
    "StaticRegistryResolver",
    "ChainedRegistryResolver",
    "get_static_registry",
    "provides",
    "LoggingDiagnosticsSink",
    "EventBusDiagnosticsSink",
    "CompositeDiagnosticsSink",
    "ContextVarSecondaryProvider",
    "FixedSecondaryProvider",
    "use_secondary_context",
    # Exceptions
    "HangarError",
    "ValidationError",
    "PreconditionError",
    "ConfigurationError",
    "DiscoveryError",
    "RegistryLoadError",
    "ProviderLoadError",
]
