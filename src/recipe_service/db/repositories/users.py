"""Credential store: persistence of user accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import exists, or_, select

from recipe_service.db.models import User


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class UserRepository:
    """Lookups and writes for :class:`User`. All lookups are case-sensitive."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def find_by_username(self, username: str) -> User | None:
        return await self._session.scalar(select(User).where(User.username == username))

    async def find_by_email(self, email: str) -> User | None:
        return await self._session.scalar(select(User).where(User.email == email))

    async def find_by_username_or_email(self, identifier: str) -> User | None:
        return await self._session.scalar(
            select(User).where(or_(User.username == identifier, User.email == identifier))
        )

    async def exists_by_username(self, username: str) -> bool:
        return bool(
            await self._session.scalar(select(exists().where(User.username == username)))
        )

    async def exists_by_email(self, email: str) -> bool:
        return bool(
            await self._session.scalar(select(exists().where(User.email == email)))
        )

    async def save(self, user: User) -> User:
        """Add or update a user and flush so constraint violations surface here."""
        self._session.add(user)
        await self._session.flush()
        return user
