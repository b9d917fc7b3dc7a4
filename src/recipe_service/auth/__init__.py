"""Authentication and authorization.

Components:
- ``passwords``: one-way password hashing (bcrypt)
- ``tokens``: signed access/refresh token issue and verification
- ``service``: registration, login, refresh, account management
- ``middleware``: per-request caller resolution
- ``dependencies``: route-level authentication and role requirements
"""

from .dependencies import (
    CurrentUserDep,
    RequireAdmin,
    RequireRoles,
    get_current_user,
    get_current_user_optional,
)
from .principal import CurrentUser


__all__ = [
    "CurrentUser",
    "CurrentUserDep",
    "RequireAdmin",
    "RequireRoles",
    "get_current_user",
    "get_current_user_optional",
]
