"""
Transaction routes. Every endpoint requires a live session.

``POST /transactions`` reads its body only after the session has been
resolved, so an unauthenticated caller always gets 401 whatever it sent.
"""

from __future__ import annotations

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.errors import read_json
from auth.dependencies import get_current_user_id, get_database
from database.helpers import create_transaction, get_balance, list_transactions
from database.session import Database
from utils.schemas import BalanceOut, TransactionCreate, TransactionOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

_CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TransactionCreate.model_json_schema()}},
    }
}


@router.post(
    "",
    response_model=TransactionOut,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_CREATE_BODY,
)
async def add_transaction(
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Database = Depends(get_database),
) -> TransactionOut:
    payload = await read_json(request, status.HTTP_422_UNPROCESSABLE_ENTITY)
    try:
        body = TransactionCreate.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))

    row = await create_transaction(
        db,
        user_id,
        description=body.description,
        value=body.value,
        type=body.type,
    )
    logger.info("User %s recorded a %s transaction", user_id, body.type)
    return TransactionOut.from_row(row)


@router.get("", response_model=List[TransactionOut])
async def get_transactions(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Database = Depends(get_database),
) -> List[TransactionOut]:
    rows = await list_transactions(db, user_id)
    return [TransactionOut.from_row(r) for r in rows]


@router.get("/balance", response_model=BalanceOut)
async def get_transactions_balance(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Database = Depends(get_database),
) -> BalanceOut:
    return BalanceOut(balance=await get_balance(db, user_id))
