"""
Authentication service — sign-up, sign-in and sign-out.

Every call returns a ``Result``:

  • ``Ok(User)``                 — sign-up created the account
  • ``Ok(SignInResponse)``       — sign-in issued a session token
  • ``Err(ErrorKind.*, message)`` — anything else

Sign-in deliberately distinguishes an unknown email (``NOT_FOUND``) from a
wrong password (``AUTHENTICATION``).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from auth.credentials import CredentialStore
from auth.password import PasswordHasher
from auth.sessions import SessionStore
from database.errors import ConflictError
from utils.result import Err, ErrorKind, Ok, Result
from utils.schemas import SignInRequest, SignInResponse, SignUpRequest

logger = logging.getLogger(__name__)


def _describe(exc: ValidationError) -> str:
    """Name the first offending field without echoing its value."""
    error = exc.errors(include_url=False, include_input=False)[0]
    if error["loc"]:
        return f"'{error['loc'][0]}' is missing or invalid"
    return error["msg"].removeprefix("Value error, ")


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionStore,
        hasher: PasswordHasher,
    ) -> None:
        self.credentials = credentials
        self.sessions = sessions
        self.hasher = hasher

    async def sign_up(self, payload: Any) -> Result:
        try:
            body = SignUpRequest.model_validate(payload)
        except ValidationError as exc:
            return Err(ErrorKind.VALIDATION, _describe(exc))

        try:
            if await self.credentials.find_by_email(body.email) is not None:
                logger.info("Sign-up refused: email already registered")
                return Err(ErrorKind.CONFLICT, "Email already registered")

            password_hash = await asyncio.to_thread(self.hasher.hash, body.password)

            try:
                user = await self.credentials.create(body.name, body.email, password_hash)
            except ConflictError:
                logger.info("Sign-up lost a race on the email unique constraint")
                return Err(ErrorKind.CONFLICT, "Email already registered")
        except SQLAlchemyError:
            logger.exception("Storage failure during sign-up")
            return Err(ErrorKind.INTERNAL)

        logger.info("Registered user %s", user.user_id)
        return Ok(user)

    async def sign_in(self, payload: Any) -> Result:
        try:
            body = SignInRequest.model_validate(payload)
        except ValidationError as exc:
            return Err(ErrorKind.VALIDATION, _describe(exc))

        try:
            user = await self.credentials.find_by_email(body.email)
            if user is None:
                return Err(ErrorKind.NOT_FOUND, "User not registered")

            matches = await asyncio.to_thread(
                self.hasher.verify, body.password, user.password_hash
            )
            if not matches:
                logger.warning("Sign-in rejected for user %s: wrong password", user.user_id)
                return Err(ErrorKind.AUTHENTICATION, "Invalid credentials")

            token = await self.sessions.create(user.user_id)
        except SQLAlchemyError:
            logger.exception("Storage failure during sign-in")
            return Err(ErrorKind.INTERNAL)

        logger.info("Sign-in: user %s", user.user_id)
        return Ok(SignInResponse(name=user.name, token=token))

    async def sign_out(self, token: Optional[str]) -> Result:
        try:
            await self.sessions.revoke(token)
        except SQLAlchemyError:
            logger.exception("Storage failure during sign-out")
            return Err(ErrorKind.INTERNAL)
        return Ok(None)
