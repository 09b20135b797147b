"""Process configuration read from the environment (and backend/.env)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from services.ids import GAME_CODE_LENGTH, PLAYER_ID_LENGTH

BACKEND_DIR = Path(__file__).resolve().parent.parent


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    role_catalog_path: str | None = None
    game_code_length: int = GAME_CODE_LENGTH
    player_id_length: int = PLAYER_ID_LENGTH
    cors_origins: tuple[str, ...] = ("*",)
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(BACKEND_DIR / ".env")
        origins = tuple(
            o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
        )
        return cls(
            role_catalog_path=os.environ.get("ROLE_CATALOG_PATH", "").strip() or None,
            game_code_length=_int_env("GAME_CODE_LENGTH", GAME_CODE_LENGTH),
            player_id_length=_int_env("PLAYER_ID_LENGTH", PLAYER_ID_LENGTH),
            cors_origins=origins or ("*",),
            host=os.environ.get("HOST", "").strip() or "0.0.0.0",
            port=_int_env("PORT", 3000),
            log_level=os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO",
        )
