"""Secondary context provider interface."""

from abc import ABC, abstractmethod

from ..value_objects import LoaderContext


class ISecondaryContextProvider(ABC):
    """Supplies the ambient secondary context consulted by discovery."""

    @abstractmethod
    def current_secondary_context(self) -> LoaderContext:
        """Return the currently relevant alternate context."""
