"""Relational persistence: ORM models, engine/session lifecycle, repositories."""

from .base import Base
from .session import close_database, create_all, get_session, init_database


__all__ = [
    "Base",
    "close_database",
    "create_all",
    "get_session",
    "init_database",
]
