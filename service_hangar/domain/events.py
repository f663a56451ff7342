"""Domain events for service discovery.

Events capture discovery failures so that reactions (logging, auditing,
metrics) stay decoupled from the enumeration code.
"""

from dataclasses import asdict, dataclass, field
import time
from typing import Any, Dict
import uuid


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Identity and timestamp are keyword-only, so subclasses can declare
    required fields of their own.
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()), kw_only=True)
    occurred_at: float = field(default_factory=time.time, kw_only=True)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the event for serialization, tagged with its class name."""
        return {"event_type": type(self).__name__, **asdict(self)}


@dataclass
class ProviderLoadFailed(DomainEvent):
    """Published when a single registered provider fails to construct."""

    service: str
    error_message: str
    error_type: str
    provider: str | None = None


@dataclass
class ServiceRegistryUnavailable(DomainEvent):
    """Published when a context's registry for a service cannot be located."""

    service: str
    error_message: str
    error_type: str
    context: str | None = None
