"""Registry resolver implementations."""

from .chained import ChainedRegistryResolver
from .entry_points import EntryPointRegistryResolver
from .static_table import get_static_registry, provides, StaticRegistryResolver

__all__ = [
    "ChainedRegistryResolver",
    "EntryPointRegistryResolver",
    "StaticRegistryResolver",
    "get_static_registry",
    "provides",
]
