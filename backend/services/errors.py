from __future__ import annotations


class GameError(Exception):
    """A request that was rejected without touching session state."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class SessionNotFound(GameError):
    message = "Game not found."


class NotHost(GameError):
    message = "Host only action."


class NoPlayers(GameError):
    message = "No players to assign roles."


class ParticipantNotFound(GameError):
    message = "Player not found."


class EmptyEntry(GameError):
    message = "Log entry cannot be empty."
