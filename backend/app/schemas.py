"""Typed request payloads for each WebSocket event, validated at the boundary."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _as_role_list(value: Any) -> list[str]:
    # Anything that isn't a list means "no roles"; items are stringified.
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError("expected text")


RoleList = Annotated[list[str], BeforeValidator(_as_role_list)]
Text = Annotated[str | None, BeforeValidator(_as_text)]


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateRequest(_Request):
    host_name: Text = None
    selected_roles: RoleList = []


class GameRequest(_Request):
    game_id: Text = None


class JoinRequest(GameRequest):
    name: Text = None


class UpdateRolesRequest(GameRequest):
    selected_roles: RoleList = []


class RandomizeRolePoolRequest(GameRequest):
    player_count: Any = None


class PlayerRequest(GameRequest):
    player_id: Text = None


class AssignRoleRequest(PlayerRequest):
    role: Text = None


class AddLogRequest(GameRequest):
    text: Text = None
