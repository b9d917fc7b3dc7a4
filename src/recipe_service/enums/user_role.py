"""User roles and the privileges they imply."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class UserRole(StrEnum):
    """Role granted to a user account."""

    USER = "USER"
    PREMIUM = "PREMIUM"
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"

    @property
    def display_name(self) -> str:
        return ROLE_DISPLAY_NAMES[self]

    @property
    def authority(self) -> str:
        """Authority string derived from the role, e.g. ``ROLE_ADMIN``."""
        return f"ROLE_{self.value}"


ROLE_DISPLAY_NAMES: Final[dict[UserRole, str]] = {
    UserRole.USER: "User",
    UserRole.PREMIUM: "Premium User",
    UserRole.ADMIN: "Administrator",
    UserRole.MODERATOR: "Moderator",
}

_ADMIN_ROLES: Final = frozenset({UserRole.ADMIN, UserRole.MODERATOR})
_PREMIUM_ROLES: Final = frozenset({UserRole.PREMIUM, UserRole.ADMIN, UserRole.MODERATOR})


def has_admin_privileges(role: UserRole) -> bool:
    return role in _ADMIN_ROLES


def has_premium_access(role: UserRole) -> bool:
    return role in _PREMIUM_ROLES
