"""
Credential store — user identity records.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from database.errors import ConflictError
from database.models import User
from database.session import Database

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive lookup. ``None`` when nobody owns the address."""
        async with self._db.session() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def get(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = uuid.UUID(user_id) if isinstance(user_id, str) else user_id
        async with self._db.session() as session:
            return await session.get(User, uid)

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        The unique constraint on ``users.email`` is the final word on
        duplicates; a violation surfaces as ``ConflictError`` even when an
        earlier ``find_by_email`` saw nothing.
        """
        user = User(
            user_id=uuid.uuid4(),
            name=name,
            email=email,
            password_hash=password_hash,
        )
        try:
            async with self._db.session() as session:
                session.add(user)
                await session.flush()
        except IntegrityError as exc:
            logger.info("Insert rejected by unique constraint on users.email")
            raise ConflictError("email already registered") from exc
        return user
