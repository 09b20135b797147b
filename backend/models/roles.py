from dataclasses import dataclass, field

DEFAULT_ROLES = [
    "Washerwoman",
    "Librarian",
    "Investigator",
    "Chef",
    "Empath",
    "Fortune Teller",
    "Undertaker",
    "Monk",
    "Ravenkeeper",
    "Slayer",
    "Soldier",
    "Mayor",
    "Poisoner",
    "Spy",
    "Scarlet Woman",
    "Baron",
    "Imp",
]

DEFAULT_SELECTION_SIZE = 10     # roles pre-selected for a new game
MAX_SELECTED_ROLES = 25
MAX_POOL_SIZE = 20


@dataclass(frozen=True)
class RoleInfo:
    team: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class RoleCatalog:
    role_names: tuple[str, ...]
    role_info: dict[str, RoleInfo] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "RoleCatalog":
        return cls(role_names=tuple(DEFAULT_ROLES))

    def default_selection(self) -> list[str]:
        return list(self.role_names[:DEFAULT_SELECTION_SIZE])
