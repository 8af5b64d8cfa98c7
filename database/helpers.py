"""
Database helper functions — persist and query a user's transactions.

"""

from __future__ import annotations

import logging
import uuid
from typing import List

from sqlalchemy import case, func, select

from database.models import Transaction
from database.session import Database

logger = logging.getLogger(__name__)



def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value



async def create_transaction(
    db: Database,
    user_id: str | uuid.UUID,
    *,
    description: str,
    value: int,
    type: str,
) -> Transaction:
    """Insert a transaction owned by ``user_id`` and return the stored row."""
    row = Transaction(
        transaction_id=uuid.uuid4(),
        user_id=_to_uuid(user_id),
        description=description,
        value=value,
        type=type,
    )
    async with db.session() as session:
        session.add(row)
        await session.flush()
    logger.debug("Saved %s transaction %s for user %s", type, row.transaction_id, user_id)
    return row


async def list_transactions(db: Database, user_id: str | uuid.UUID) -> List[Transaction]:
    """Return the user's transactions, newest first."""
    async with db.session() as session:
        result = await session.execute(
            select(Transaction)
            .where(Transaction.user_id == _to_uuid(user_id))
            .order_by(Transaction.created_at.desc(), Transaction.transaction_id)
        )
        return list(result.scalars().all())


async def get_balance(db: Database, user_id: str | uuid.UUID) -> int:
    """Income minus expense across all of the user's transactions."""
    signed = case(
        (Transaction.type == "expense", -Transaction.value),
        else_=Transaction.value,
    )
    async with db.session() as session:
        result = await session.execute(
            select(func.coalesce(func.sum(signed), 0))
            .where(Transaction.user_id == _to_uuid(user_id))
        )
        return int(result.scalar_one())
