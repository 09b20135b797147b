"""Short human-typeable identifiers for games and players."""

import secrets

# Avoid 0/O, 1/I so codes read aloud or typed from a screen don't get misread.
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
GAME_CODE_LENGTH = 6
PLAYER_ID_LENGTH = 4


def generate_id(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(raw: object) -> str:
    """Game codes are case-insensitive on input; surrounding whitespace is ignored."""
    if raw is None:
        return ""
    return str(raw).strip().upper()
