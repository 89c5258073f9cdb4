"""Per-route WebSocket settings and handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from microws.topic_tree import TopicTree

Handler = Optional[Callable[..., Any]]

_MAX_MARGIN = 16


@dataclass
class WebSocketContextData:
    """Settings and event handlers shared by WebSockets of one route."""

    topic_tree: TopicTree | None = None

    open_handler: Handler = None
    message_handler: Handler = None
    dropped_handler: Handler = None
    drain_handler: Handler = None
    subscription_handler: Handler = None
    close_handler: Handler = None
    ping_handler: Handler = None
    pong_handler: Handler = None

    max_payload_length: int = 0
    compression: int = 0
    max_backpressure: int = 0
    close_on_backpressure_limit: bool = False
    reset_idle_timeout_on_send: bool = False
    send_pings_automatically: bool = False
    max_lifetime: int = 0

    idle_timeout_components: tuple[int, int] = (0, 0)

    def calculate_idle_timeout_components(self, idle_timeout: int) -> tuple[int, int]:
        """Split an idle timeout into (idle part, ping timeout margin).

        The margin is 4, 8 or 16 seconds depending on the idle timeout. When
        pings are sent automatically the idle part shrinks by the margin.
        """
        if not 0 <= idle_timeout <= 0xFFFF:
            raise ValueError("idle_timeout must fit in 16 bits")
        margin = 4
        while idle_timeout - margin * 2 >= margin * 2 and margin < _MAX_MARGIN:
            margin <<= 1
        reduction = margin if self.send_pings_automatically else 0
        # Kept in unsigned 16-bit range like the timeout setting itself.
        self.idle_timeout_components = ((idle_timeout - reduction) & 0xFFFF, margin)
        return self.idle_timeout_components