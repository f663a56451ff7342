"""Blocking queue factory contract and implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
import queue


class QueueFactory(ABC):
    """Creates thread-safe queues for asynchronous hand-off."""

    __service_group__ = "service_hangar.queue_factories"

    @abstractmethod
    def create(self, capacity: int) -> queue.Queue:
        """Create a queue sized for capacity items."""


class UnboundedQueueFactory(QueueFactory):
    """Ignores capacity and creates an unbounded queue."""

    def create(self, capacity: int) -> queue.Queue:
        return queue.Queue()


class BoundedQueueFactory(QueueFactory):
    """Creates a queue that blocks producers once capacity items are waiting."""

    def create(self, capacity: int) -> queue.Queue:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        return queue.Queue(maxsize=capacity)
