"""Domain entity for dashboard accounts."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    GUEST = "GUEST"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"  # system maintainer


@dataclass
class User:
    """A dashboard account. ``username`` is the primary key and never changes."""

    username: str
    role: UserRole = UserRole.GUEST
    name: str | None = None
    password: str | None = None  # stored as plain text by design of the source system

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @property
    def can_edit(self) -> bool:
        return self.role in (UserRole.MANAGER, UserRole.ADMIN)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
