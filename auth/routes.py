"""
Auth API routes — sign-up, sign-in, sign-out and the current profile.

Bodies are read as raw JSON and validated by the service so that a
malformed payload is a 400, never FastAPI's 422.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.errors import http_error, read_json
from auth.credentials import CredentialStore
from auth.dependencies import (
    UNAUTHORIZED_DETAIL,
    get_auth_service,
    get_credential_store,
    get_current_user_id,
    get_token,
)
from auth.service import AuthService
from utils.schemas import SignInResponse, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> Response:
    """Create an account. Does not sign the user in."""
    result = await service.sign_up(await read_json(request, status.HTTP_400_BAD_REQUEST))
    if not result.ok:
        raise http_error(result)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/sign-in", response_model=SignInResponse)
async def sign_in(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> SignInResponse:
    """Exchange email + password for a session token."""
    result = await service.sign_in(await read_json(request, status.HTTP_400_BAD_REQUEST))
    if not result.ok:
        raise http_error(result)
    return result.value


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service),
) -> Response:
    result = await service.sign_out(token)
    if not result.ok:
        raise http_error(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserProfile)
async def me(
    user_id: uuid.UUID = Depends(get_current_user_id),
    credentials: CredentialStore = Depends(get_credential_store),
) -> UserProfile:
    user = await credentials.get(user_id)
    if user is None:
        # Session outlived its user; treat like any other dead token.
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_DETAIL)
    return UserProfile(id=str(user.user_id), name=user.name, email=user.email)
