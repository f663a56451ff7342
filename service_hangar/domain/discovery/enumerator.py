"""Provider enumeration for a single loader context.

Failures are isolated at two levels:
- the whole registry of a context cannot be located: one error
  diagnostic, empty result;
- one provider cannot be constructed: one warning diagnostic, that
  provider is skipped and the rest are still produced.
"""

from __future__ import annotations

from typing import Iterator, TypeVar

from ...logging_config import get_logger
from ..contracts.diagnostics import IDiagnosticsSink
from ..contracts.registry_resolver import IRegistryResolver
from ..exceptions import PreconditionError, ProviderLoadError
from ..value_objects import LoaderContext, service_name

T = TypeVar("T")

logger = get_logger(__name__)


def check_service_type(service_type: object) -> None:
    """Fail fast if service_type is not a class."""
    if service_type is None or not isinstance(service_type, type):
        raise PreconditionError("service_type must be a class", field="service_type", value=service_type)


def check_context(context: object, field: str = "context") -> None:
    """Fail fast if context is not a LoaderContext."""
    if not isinstance(context, LoaderContext):
        raise PreconditionError(f"{field} must be a LoaderContext", field=field, value=context)


class ProviderEnumerator:
    """Produces instantiated providers of a service from one context.

    The enumerator holds no per-call state and can be shared between
    threads; each call to enumerate() returns an independent iterator.
    """

    def __init__(self, resolver: IRegistryResolver, diagnostics: IDiagnosticsSink):
        """Initialize the enumerator.

        Args:
            resolver: Strategy locating registries.
            diagnostics: Sink receiving failure reports.
        """
        self._resolver = resolver
        self._diagnostics = diagnostics

    @property
    def resolver(self) -> IRegistryResolver:
        return self._resolver

    @property
    def diagnostics(self) -> IDiagnosticsSink:
        return self._diagnostics

    def enumerate(self, service_type: type[T], context: LoaderContext, verbose: bool = True) -> Iterator[T]:
        """Lazily instantiate every provider of service_type found in context.

        Preconditions are checked immediately; locating the registry and
        constructing providers happen as the returned iterator advances.

        Args:
            service_type: The service contract.
            context: The scope to search.
            verbose: Report failures to the diagnostics sink.

        Returns:
            Iterator over provider instances.

        Raises:
            PreconditionError: If service_type or context is invalid.
        """
        check_service_type(service_type)
        check_context(context)
        return self._iterate(service_type, context, verbose)

    def _iterate(self, service_type: type[T], context: LoaderContext, verbose: bool) -> Iterator[T]:
        try:
            handles = list(self._resolver.resolve(service_type, context))
        except Exception as e:
            if verbose:
                logger.debug(
                    "service_registry_lookup_failed",
                    service=service_name(service_type),
                    context=str(context),
                    error=str(e),
                )
                self._report(self._diagnostics.error, service_type, e)
            return

        for handle in handles:
            try:
                instance = handle.get()
            except ProviderLoadError as e:
                if verbose:
                    self._report(self._diagnostics.warn, service_type, e)
                continue
            yield instance

    def _report(self, emit, service_type: type, cause: BaseException) -> None:
        try:
            emit(service_type, cause)
        except Exception as e:
            logger.error(
                "diagnostics_sink_failed",
                service=service_name(service_type),
                error=str(e),
                exc_info=True,
            )
