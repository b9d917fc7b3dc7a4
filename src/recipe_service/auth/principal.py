"""The authenticated caller, as seen by request handlers and services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from recipe_service.enums import UserRole
from recipe_service.enums.user_role import has_admin_privileges


class CurrentUser(BaseModel):
    """Immutable identity of the caller for one request.

    Built by the access-control middleware from a verified access token and
    the stored user record; passed explicitly into every service call that
    needs to know who is asking.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    role: UserRole

    @property
    def authorities(self) -> frozenset[str]:
        return frozenset({self.role.authority})

    def has_role(self, role: UserRole | str) -> bool:
        return self.role == role

    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def has_admin_privileges(self) -> bool:
        return has_admin_privileges(self.role)
