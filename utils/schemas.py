"""
Pydantic schemas for the HTTP surface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints, model_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MAX_PASSWORD_BYTES = 72  # bcrypt only looks at the first 72 bytes
MAX_TRANSACTION_VALUE = 10**12  # keeps per-user sums well inside BIGINT


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class SignUpRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    repeat_password: str = Field(..., alias="repeatPassword", min_length=1)

    @model_validator(mode="after")
    def _passwords_agree(self) -> "SignUpRequest":
        if len(self.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError("'password' is too long")
        if self.repeat_password != self.password:
            raise ValueError("'repeatPassword' must match 'password'")
        return self


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignInResponse(BaseModel):
    name: str
    token: str


class UserProfile(BaseModel):
    id: str
    name: str
    email: str


# ═══════════════════════════════════════════════════════════════════════════════
# Transactions
# ═══════════════════════════════════════════════════════════════════════════════


class TransactionCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    value: int = Field(
        ...,
        gt=0,
        le=MAX_TRANSACTION_VALUE,
        description="Amount in minor currency units",
    )
    type: Literal["income", "expense"]


class TransactionOut(BaseModel):
    id: str
    description: str
    value: int
    type: str
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> "TransactionOut":
        return cls(
            id=str(row.transaction_id),
            description=row.description,
            value=row.value,
            type=row.type,
            created_at=row.created_at,
        )


class BalanceOut(BaseModel):
    balance: int
