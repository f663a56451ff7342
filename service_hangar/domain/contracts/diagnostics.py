"""Diagnostics sink interface.

Receives discovery failures. Both operations are fire-and-forget and
must be safe to call from concurrent discovery calls.
"""

from abc import ABC, abstractmethod


class IDiagnosticsSink(ABC):
    """Interface for reporting discovery failures."""

    @abstractmethod
    def warn(self, service_type: type, cause: BaseException) -> None:
        """Report that a single provider failed to load.

        Args:
            service_type: The service being discovered.
            cause: The failure.
        """

    @abstractmethod
    def error(self, service_type: type, cause: BaseException) -> None:
        """Report that a whole context registry could not be loaded.

        Args:
            service_type: The service being discovered.
            cause: The failure.
        """


class NullDiagnosticsSink(IDiagnosticsSink):
    """Sink that drops all diagnostics."""

    def warn(self, service_type: type, cause: BaseException) -> None:
        """No-op warn."""
        pass

    def error(self, service_type: type, cause: BaseException) -> None:
        """No-op error."""
        pass
