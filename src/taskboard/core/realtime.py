"""Real-time fan-out of task events to connected clients.

Each project has one channel keyed ``project-<id>``. Clients join channels
explicitly and leave all of them when they disconnect. Delivery is
best-effort and at-most-once: nothing is persisted or replayed, so a client
that is not connected at publish time reconciles on its next full fetch.
"""

from collections import defaultdict
from typing import Any, Protocol
from uuid import UUID

from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

TASK_CREATED = "task-created"
TASK_UPDATED = "task-updated"
JOIN_PROJECT = "join-project"
JOINED_PROJECT = "joined-project"


class Connection(Protocol):
    """A connected client handle (satisfied by starlette's WebSocket)."""

    async def send_json(self, data: Any, mode: str = "text") -> None: ...


def project_channel(project_id: UUID | str) -> str:
    return f"project-{project_id}"


class FanoutHub:
    """Owns channel membership for the lifetime of the process."""

    def __init__(self) -> None:
        self._channels: dict[str, set[Connection]] = defaultdict(set)

    def subscribe(self, channel: str, connection: Connection) -> None:
        self._channels[channel].add(connection)
        logger.debug("Connection subscribed", channel=channel)

    def unsubscribe(self, connection: Connection) -> None:
        """Remove a connection from every channel it joined."""
        for channel in list(self._channels):
            members = self._channels[channel]
            members.discard(connection)
            if not members:
                del self._channels[channel]

    async def publish(self, channel: str, event: str, payload: dict[str, Any]) -> int:
        """Send an event to every current subscriber of a channel.

        Returns:
            Number of connections the event was delivered to
        """
        members = list(self._channels.get(channel, ()))
        message = {"event": event, "data": payload}
        delivered = 0
        for connection in members:
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(
                    "Dropping connection after failed delivery",
                    channel=channel,
                    event_name=event,
                    error=str(e),
                )
                self.unsubscribe(connection)
        logger.debug("Event published", channel=channel, event_name=event, delivered=delivered)
        return delivered


# Created at import, i.e. once per worker process
fanout_hub = FanoutHub()


def get_fanout_hub() -> FanoutHub:
    """FastAPI dependency returning the process-wide hub."""
    return fanout_hub
