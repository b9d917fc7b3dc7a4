"""Declarative base shared by all ORM models."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    def __repr__(self) -> str:
        # Only column attributes that are already loaded, so repr never
        # triggers IO on an async session.
        state = inspect(self)
        fields = ", ".join(
            f"{attr.key}={attr.loaded_value!r}"
            for attr in state.attrs
            if attr.key in state.mapper.columns and attr.key not in state.unloaded
        )
        return f"{type(self).__name__}({fields})"
