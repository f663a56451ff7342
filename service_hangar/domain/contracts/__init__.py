"""Domain contracts - interfaces for external dependencies.

This module defines contracts (abstract interfaces) that the domain layer
depends on. Implementations are provided by the infrastructure layer.
"""

from .context_provider import ISecondaryContextProvider
from .diagnostics import IDiagnosticsSink, NullDiagnosticsSink
from .registry_resolver import IRegistryResolver

__all__ = [
    "IDiagnosticsSink",
    "IRegistryResolver",
    "ISecondaryContextProvider",
    "NullDiagnosticsSink",
]
