"""Host authority transfer when a connection drops."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from models import GameSession, LogEntry

logger = logging.getLogger(__name__)


def resolve_disconnect(
    session: GameSession,
    connection_id: str,
    *,
    now: datetime | None = None,
) -> bool:
    """
    Mark the player on ``connection_id`` disconnected and hand host authority
    to the first still-connected player in roster order if needed.

    Returns False when the connection has no seat in this game. If nobody else
    is connected, authority stays with the departed connection.
    """
    player = session.find_connection(connection_id)
    if player is None:
        return False

    ts = now or datetime.now(timezone.utc)
    player.connected = False
    session.log.append(LogEntry(ts=ts, text=f"{player.name} disconnected."))

    if session.host_connection_id != connection_id:
        return True

    replacement = next(
        (p for p in session.players if p.connected and p.connection_id != connection_id),
        None,
    )
    if replacement is None:
        logger.info("[authority] Game %s has no connected players; host stays %s", session.code, connection_id)
        return True

    session.host_connection_id = replacement.connection_id
    session.host_name = replacement.name
    session.log.append(LogEntry(ts=ts, text=f"{replacement.name} is now host."))
    logger.info("[authority] Game %s host transferred to %r", session.code, replacement.name)
    return True
