"""
FastAPI dependencies for authentication.

``get_current_user_id`` runs ahead of every protected route: it takes the
literal ``authorization`` header value as the session token, resolves it
through the session store and hands the owning user id to the route.
Missing and unknown tokens get the same 401.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError

from api.errors import INTERNAL_ERROR_DETAIL
from auth.credentials import CredentialStore
from auth.service import AuthService
from auth.sessions import SessionStore
from database.session import Database

logger = logging.getLogger(__name__)

UNAUTHORIZED_DETAIL = "Invalid or missing session"


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


async def get_token(
    authorization: Optional[str] = Header(None),
) -> str:
    """Return the raw token or reject the request."""
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    return authorization


async def get_current_user_id(
    request: Request,
    token: str = Depends(get_token),
    sessions: SessionStore = Depends(get_session_store),
) -> uuid.UUID:
    """Resolve the bearer token to the user id that signed in with it."""
    try:
        user_id = await sessions.resolve(token)
    except SQLAlchemyError:
        logger.exception("Storage failure while resolving a session")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    request.state.user_id = user_id
    return user_id
