"""Multi-context discovery service.

Combines a primary context with an optional ambient secondary context:

    primary providers -> (secondary providers) -> deduplicate -> caller

The pipeline is one-shot. Nothing is cached between calls.
"""

from __future__ import annotations

from itertools import chain
from typing import Iterator, TypeVar

from ...logging_config import get_logger
from ..contracts.context_provider import ISecondaryContextProvider
from ..value_objects import LoaderContext, service_name
from .deduplicator import deduplicate
from .enumerator import check_context, check_service_type, ProviderEnumerator

T = TypeVar("T")

logger = get_logger(__name__)


class DiscoveryService:
    """Discovers providers of a service across loader contexts.

    Attributes:
        enumerator: Per-context provider enumerator.
        secondary_provider: Source of the ambient secondary context.
    """

    def __init__(self, enumerator: ProviderEnumerator, secondary_provider: ISecondaryContextProvider):
        """Initialize the discovery service.

        Args:
            enumerator: Per-context provider enumerator.
            secondary_provider: Source of the ambient secondary context,
                consulted only when a call asks for it.
        """
        self._enumerator = enumerator
        self._secondary_provider = secondary_provider

    @property
    def enumerator(self) -> ProviderEnumerator:
        return self._enumerator

    @property
    def secondary_provider(self) -> ISecondaryContextProvider:
        return self._secondary_provider

    def discover(
        self,
        service_type: type[T],
        primary_context: LoaderContext,
        use_secondary: bool = False,
        *,
        verbose: bool = True,
    ) -> Iterator[T]:
        """Discover every available provider of a service.

        Providers from the primary context come first. If use_secondary is
        set and the ambient secondary context is a different scope, its
        providers follow. Only the first instance of each concrete class is
        kept, so the primary context wins over the secondary one.

        Broken providers and unreadable registries are reported to the
        diagnostics sink (unless verbose is False) and skipped.

        Args:
            service_type: The service contract.
            primary_context: The caller's context.
            use_secondary: Also search the ambient secondary context.
            verbose: Report failures to the diagnostics sink.

        Returns:
            Single-pass iterator over provider instances.

        Raises:
            PreconditionError: If service_type or primary_context is invalid.
        """
        check_service_type(service_type)
        check_context(primary_context, "primary_context")

        services = self._enumerator.enumerate(service_type, primary_context, verbose)

        if use_secondary:
            # resolved now so the caller's override applies wherever the result is consumed
            secondary_context = self._secondary_provider.current_secondary_context()
            if secondary_context is not None and secondary_context != primary_context:
                services = chain(
                    services,
                    self._enumerator.enumerate(service_type, secondary_context, verbose),
                )
            else:
                logger.debug(
                    "secondary_context_skipped",
                    service=service_name(service_type),
                    context=str(primary_context),
                )

        return deduplicate(services)
