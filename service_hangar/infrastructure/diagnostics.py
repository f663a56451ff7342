"""Diagnostics sink implementations.

- LoggingDiagnosticsSink - structured log records
- EventBusDiagnosticsSink - domain events on an EventBus
- CompositeDiagnosticsSink - fan-out to several sinks
"""

from __future__ import annotations

from typing import Iterable

from ..domain.contracts.diagnostics import IDiagnosticsSink
from ..domain.events import ProviderLoadFailed, ServiceRegistryUnavailable
from ..domain.exceptions import ProviderLoadError, RegistryLoadError
from ..domain.value_objects import service_name
from ..logging_config import get_logger
from .event_bus import EventBus

logger = get_logger(__name__)


def _reason(cause: BaseException) -> str:
    if isinstance(cause, (ProviderLoadError, RegistryLoadError)):
        return cause.reason
    return str(cause)


class LoggingDiagnosticsSink(IDiagnosticsSink):
    """Reports discovery failures as structured log records."""

    def warn(self, service_type: type, cause: BaseException) -> None:
        logger.warning(
            "provider_load_failed",
            service=service_name(service_type),
            provider=getattr(cause, "provider", None),
            error=_reason(cause),
            error_type=type(cause).__name__,
            exc_info=cause,
        )

    def error(self, service_type: type, cause: BaseException) -> None:
        logger.error(
            "service_registry_unavailable",
            service=service_name(service_type),
            context=getattr(cause, "context", None),
            error=_reason(cause),
            error_type=type(cause).__name__,
            exc_info=cause,
        )


class EventBusDiagnosticsSink(IDiagnosticsSink):
    """Publishes discovery failures as domain events."""

    def __init__(self, event_bus: EventBus):
        self._event_bus = event_bus

    def warn(self, service_type: type, cause: BaseException) -> None:
        self._event_bus.publish(
            ProviderLoadFailed(
                service=service_name(service_type),
                error_message=_reason(cause),
                error_type=type(cause.__cause__ or cause).__name__,
                provider=getattr(cause, "provider", None),
            )
        )

    def error(self, service_type: type, cause: BaseException) -> None:
        self._event_bus.publish(
            ServiceRegistryUnavailable(
                service=service_name(service_type),
                error_message=_reason(cause),
                error_type=type(cause.__cause__ or cause).__name__,
                context=getattr(cause, "context", None),
            )
        )


class CompositeDiagnosticsSink(IDiagnosticsSink):
    """Forwards every report to each wrapped sink.

    A failing sink does not prevent the others from being called.
    """

    def __init__(self, sinks: Iterable[IDiagnosticsSink]):
        self._sinks = tuple(sinks)

    @property
    def sinks(self) -> tuple[IDiagnosticsSink, ...]:
        return self._sinks

    def warn(self, service_type: type, cause: BaseException) -> None:
        for sink in self._sinks:
            try:
                sink.warn(service_type, cause)
            except Exception as e:
                logger.error("diagnostics_sink_failed", sink=type(sink).__name__, error=str(e), exc_info=True)

    def error(self, service_type: type, cause: BaseException) -> None:
        for sink in self._sinks:
            try:
                sink.error(service_type, cause)
            except Exception as e:
                logger.error("diagnostics_sink_failed", sink=type(sink).__name__, error=str(e), exc_info=True)
