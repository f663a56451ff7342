"""Infrastructure layer - implementations of domain contracts."""

from .context_provider import ContextVarSecondaryProvider, FixedSecondaryProvider, use_secondary_context
from .diagnostics import CompositeDiagnosticsSink, EventBusDiagnosticsSink, LoggingDiagnosticsSink
from .event_bus import EventBus, get_event_bus, reset_event_bus

__all__ = [
    "CompositeDiagnosticsSink",
    "ContextVarSecondaryProvider",
    "EventBus",
    "EventBusDiagnosticsSink",
    "FixedSecondaryProvider",
    "LoggingDiagnosticsSink",
    "get_event_bus",
    "reset_event_bus",
    "use_secondary_context",
]
