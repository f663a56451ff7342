"""Socket performance preferences builder."""

from __future__ import annotations

from dataclasses import dataclass, replace
import socket

from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class SocketPerformancePreferences:
    """Relative importance of connection time, latency and bandwidth.

    Python sockets have no performance preference API, so apply() maps
    the preferences onto the options that exist: a latency preference
    above bandwidth disables Nagle's algorithm on TCP sockets.
    """

    bandwidth: int = 0
    connection_time: int = 0
    latency: int = 0

    def build(self) -> SocketPerformancePreferences:
        """Return an independent copy of the current settings."""
        return replace(self)

    def apply(self, sock: socket.socket) -> None:
        if sock.type != socket.SOCK_STREAM or not hasattr(socket, "TCP_NODELAY"):
            logger.debug("socket_performance_preferences_unsupported", socket_type=str(sock.type))
            return
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1 if self.latency > self.bandwidth else 0)
