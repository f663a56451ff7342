"""Capability contracts shipped with service hangar.

Their implementations are registered as entry points of this
distribution and are found by discovery like any third-party provider.
"""

from .conditions import IfNot, PathCondition
from .filters import FilterResult, MessageFilter, RegexFilter
from .keys import EnvSecretKeyProvider, SecretKeyProvider
from .queues import BoundedQueueFactory, QueueFactory, UnboundedQueueFactory
from .sockets import SocketPerformancePreferences

__all__ = [
    "BoundedQueueFactory",
    "EnvSecretKeyProvider",
    "FilterResult",
    "IfNot",
    "MessageFilter",
    "PathCondition",
    "QueueFactory",
    "RegexFilter",
    "SecretKeyProvider",
    "SocketPerformancePreferences",
    "UnboundedQueueFactory",
]
