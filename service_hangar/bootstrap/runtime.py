"""Bootstrap helpers for wiring runtime dependencies.

This module centralizes object graph creation (composition root helpers) so that
the rest of the codebase can avoid module-level singletons and implicit globals.

The registry resolver strategy is selected here, once, from configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
import sys
from typing import Optional

from ..config import DiscoveryConfig, HangarConfig
from ..domain.contracts import IDiagnosticsSink, IRegistryResolver, ISecondaryContextProvider, NullDiagnosticsSink
from ..domain.discovery import DiscoveryService, ProviderEnumerator
from ..domain.value_objects import LoaderContext
from ..infrastructure.context_provider import ContextVarSecondaryProvider
from ..infrastructure.diagnostics import CompositeDiagnosticsSink, EventBusDiagnosticsSink, LoggingDiagnosticsSink
from ..infrastructure.event_bus import EventBus, get_event_bus
from ..infrastructure.resolvers import (
    ChainedRegistryResolver,
    EntryPointRegistryResolver,
    get_static_registry,
)


@dataclass(frozen=True)
class Runtime:
    """Container for runtime dependencies."""

    config: HangarConfig
    resolver: IRegistryResolver
    diagnostics: IDiagnosticsSink
    secondary_provider: ISecondaryContextProvider
    event_bus: EventBus
    discovery: DiscoveryService


def create_resolver(name: str) -> IRegistryResolver:
    """Create the registry resolver named in configuration."""
    if name == "static":
        return get_static_registry()
    if name == "chained":
        return ChainedRegistryResolver([get_static_registry(), EntryPointRegistryResolver()])
    return EntryPointRegistryResolver()


def create_diagnostics(name: str, event_bus: EventBus) -> IDiagnosticsSink:
    """Create the diagnostics sink named in configuration."""
    if name == "none":
        return NullDiagnosticsSink()
    if name == "events":
        return EventBusDiagnosticsSink(event_bus)
    if name == "both":
        return CompositeDiagnosticsSink([LoggingDiagnosticsSink(), EventBusDiagnosticsSink(event_bus)])
    return LoggingDiagnosticsSink()


def create_secondary_provider(config: DiscoveryConfig) -> ISecondaryContextProvider:
    """Create the ambient secondary context provider.

    Without an override the secondary context is sys.path plus the
    configured extra roots.
    """
    extra = config.paths

    def default_context() -> LoaderContext:
        if not extra:
            return LoaderContext.default()
        return LoaderContext.from_paths(list(sys.path) + list(extra), label="sys.path+discovery.paths")

    return ContextVarSecondaryProvider(default_context)


def create_runtime(
    config: Optional[HangarConfig] = None,
    *,
    resolver: Optional[IRegistryResolver] = None,
    diagnostics: Optional[IDiagnosticsSink] = None,
    secondary_provider: Optional[ISecondaryContextProvider] = None,
    event_bus: Optional[EventBus] = None,
) -> Runtime:
    """Create runtime dependencies explicitly.

    Args:
        config: Optional configuration (defaults to HangarConfig()).
        resolver: Optional resolver override (useful for tests).
        diagnostics: Optional diagnostics sink override.
        secondary_provider: Optional secondary context provider override.
        event_bus: Optional event bus override.

    Returns:
        Runtime container.
    """
    config = config or HangarConfig()

    eb = event_bus or get_event_bus()
    res = resolver or create_resolver(config.discovery.resolver)
    sink = diagnostics or create_diagnostics(config.discovery.diagnostics, eb)
    secondary = secondary_provider or create_secondary_provider(config.discovery)

    discovery = DiscoveryService(ProviderEnumerator(res, sink), secondary)

    return Runtime(
        config=config,
        resolver=res,
        diagnostics=sink,
        secondary_provider=secondary,
        event_bus=eb,
        discovery=discovery,
    )
