"""
Session store — opaque bearer tokens mapped to user ids.

Tokens are random (``secrets.token_urlsafe``), carry no payload and are only
meaningful through a row in the ``sessions`` table.  A token that has no
row, is empty or is implausibly long simply does not resolve.
"""

from __future__ import annotations

import logging
import secrets
import uuid
from typing import Optional

from sqlalchemy import delete, select

from database.models import Session
from database.session import Database

logger = logging.getLogger(__name__)

MIN_TOKEN_BYTES = 16
MAX_TOKEN_BYTES = 96  # token_urlsafe(96) fills sessions.token exactly


class SessionStore:
    def __init__(
        self,
        db: Database,
        token_bytes: int = 32,
        max_token_length: int = 128,
    ) -> None:
        if not MIN_TOKEN_BYTES <= token_bytes <= MAX_TOKEN_BYTES:
            raise ValueError(
                f"token_bytes must be between {MIN_TOKEN_BYTES} and {MAX_TOKEN_BYTES}"
            )
        self._db = db
        self._token_bytes = token_bytes
        self._max_token_length = max_token_length

    async def create(self, user_id: str | uuid.UUID) -> str:
        """Persist a fresh session for ``user_id`` and return its token."""
        uid = uuid.UUID(user_id) if isinstance(user_id, str) else user_id
        token = secrets.token_urlsafe(self._token_bytes)
        async with self._db.session() as session:
            session.add(Session(token=token, user_id=uid))
        logger.debug("Session created for user %s", uid)
        return token

    async def resolve(self, token: Optional[str]) -> Optional[uuid.UUID]:
        """Return the owning user id, or ``None`` for any unknown token."""
        if not token or len(token) > self._max_token_length:
            return None
        async with self._db.session() as session:
            result = await session.execute(
                select(Session.user_id).where(Session.token == token)
            )
            return result.scalar_one_or_none()

    async def revoke(self, token: Optional[str]) -> None:
        """Delete the session row. Revoking an unknown token is a no-op."""
        if not token or len(token) > self._max_token_length:
            return
        async with self._db.session() as session:
            await session.execute(delete(Session).where(Session.token == token))

    async def revoke_all(self, user_id: str | uuid.UUID) -> int:
        uid = uuid.UUID(user_id) if isinstance(user_id, str) else user_id
        async with self._db.session() as session:
            result = await session.execute(delete(Session).where(Session.user_id == uid))
            removed = result.rowcount
        logger.info("Revoked %d session(s) for user %s", removed, uid)
        return removed
