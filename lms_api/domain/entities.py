from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Role(str, Enum):
    ADMIN = "Admin"
    INSTRUCTOR = "Instructor"
    STUDENT = "Student"

    @classmethod
    def parse(cls, name: str) -> "Role | None":
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def parse_all(cls, names: Iterable[str]) -> frozenset["Role"]:
        """Known role names only; custom roles from the store grant nothing."""
        return frozenset(r for r in (cls.parse(n) for n in names) if r is not None)


DEFAULT_ROLE = Role.STUDENT


@dataclass(frozen=True)
class Identity:
    user_id: int
    username: str
    roles: frozenset[Role] = field(default_factory=frozenset)
    # raw role names as stored, kept for the token
    role_names: tuple[str, ...] = ()

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def has_any(self, allowed: Iterable[Role]) -> bool:
        return not self.roles.isdisjoint(allowed)
