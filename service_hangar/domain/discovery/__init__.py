"""Discovery domain module.

This module contains the discovery pipeline: per-context enumeration,
deduplication, and the multi-context discovery service.
"""

from .deduplicator import deduplicate
from .discovery_service import DiscoveryService
from .enumerator import ProviderEnumerator

__all__ = [
    "DiscoveryService",
    "ProviderEnumerator",
    "deduplicate",
]
