"""Role catalog loading with a built-in fallback list."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from models import RoleCatalog, RoleInfo

logger = logging.getLogger(__name__)


class RoleEntry(BaseModel):
    name: str
    team: str | None = None
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()


class RoleCatalogFile(BaseModel):
    roles: list[RoleEntry]


def _parse(raw: object) -> RoleCatalogFile:
    # A bare list of names is accepted as shorthand.
    if isinstance(raw, list):
        raw = {"roles": [{"name": r} if isinstance(r, str) else r for r in raw]}
    return RoleCatalogFile.model_validate(raw)


def load_role_catalog(path: str | Path | None) -> RoleCatalog:
    """
    Load role names and per-role metadata from a JSON document.

    Any missing, unreadable, invalid or empty source yields the built-in
    17-role catalog.
    """
    if not path:
        logger.info("[role_catalog] No catalog path configured; using built-in roles")
        return RoleCatalog.default()

    catalog_path = Path(path)
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
        parsed = _parse(raw)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("[role_catalog] Could not load %s (%s); using built-in roles", catalog_path, e)
        return RoleCatalog.default()

    names: list[str] = []
    info: dict[str, RoleInfo] = {}
    for entry in parsed.roles:
        if not entry.name:
            continue
        names.append(entry.name)
        if entry.team or entry.description:
            info[entry.name] = RoleInfo(team=entry.team, description=entry.description)

    if not names:
        logger.warning("[role_catalog] %s lists no roles; using built-in roles", catalog_path)
        return RoleCatalog.default()

    logger.info("[role_catalog] Loaded %d roles from %s", len(names), catalog_path)
    return RoleCatalog(role_names=tuple(names), role_info=info)
