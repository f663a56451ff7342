"""Registry resolver interface.

A resolver locates the registry of one service type within one loader
context. The concrete strategy is chosen once when the runtime is wired,
so the enumeration code never branches on how a registry is stored.
"""

from abc import ABC, abstractmethod
from typing import Iterable, TypeVar

from ..value_objects import LoaderContext, ProviderHandle

T = TypeVar("T")


class IRegistryResolver(ABC):
    """Interface for locating provider registries.

    Implementations must be safe for concurrent read-only use.
    """

    @abstractmethod
    def resolve(self, service_type: type[T], context: LoaderContext) -> Iterable[ProviderHandle[T]]:
        """Locate the registry entries for a service within a context.

        Args:
            service_type: The service contract.
            context: The scope to search.

        Returns:
            Handles for the registered providers, in registration order.

        Raises:
            RegistryLoadError: If the registry cannot be located or read.
                Any other exception is treated the same way by callers.
        """
