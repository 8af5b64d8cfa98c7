"""Tests for the request models behind sign-up, sign-in and transactions."""

import pytest
from pydantic import ValidationError

from utils.schemas import (
    MAX_TRANSACTION_VALUE,
    SignInRequest,
    SignUpRequest,
    TransactionCreate,
)


def _body(**overrides):
    body = {"name": "A", "email": "a@x.com", "password": "p1", "repeatPassword": "p1"}
    body.update(overrides)
    return body


def _error_fields(exc: ValidationError) -> set:
    return {err["loc"][0] for err in exc.errors() if err["loc"]}


class TestSignUpRequest:
    def test_valid_body(self):
        req = SignUpRequest.model_validate(_body())
        assert req.email == "a@x.com"
        assert req.repeat_password == "p1"

    def test_name_is_trimmed_email_kept_verbatim(self):
        req = SignUpRequest.model_validate(_body(name="  Ann  ", email="Ann@X.com"))
        assert req.name == "Ann"
        assert req.email == "Ann@X.com"

    @pytest.mark.parametrize("field", ["name", "email", "password", "repeatPassword"])
    def test_missing_field(self, field):
        body = _body()
        del body[field]
        with pytest.raises(ValidationError) as exc_info:
            SignUpRequest.model_validate(body)
        assert field in _error_fields(exc_info.value)

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            SignUpRequest.model_validate(_body(name="   "))

    def test_non_string_email(self):
        with pytest.raises(ValidationError):
            SignUpRequest.model_validate(_body(email=42))

    @pytest.mark.parametrize("email", ["not-an-email", "a@x", "a b@x.com"])
    def test_bad_email(self, email):
        with pytest.raises(ValidationError) as exc_info:
            SignUpRequest.model_validate(_body(email=email))
        assert "email" in _error_fields(exc_info.value)

    def test_passwords_must_match(self):
        with pytest.raises(ValidationError) as exc_info:
            SignUpRequest.model_validate(_body(repeatPassword="p2"))
        assert "repeatPassword" in str(exc_info.value)

    def test_password_over_bcrypt_limit(self):
        long_password = "é" * 40  # 80 UTF-8 bytes
        with pytest.raises(ValidationError) as exc_info:
            SignUpRequest.model_validate(_body(password=long_password, repeatPassword=long_password))
        assert "too long" in str(exc_info.value)

    def test_non_object_body(self):
        with pytest.raises(ValidationError):
            SignUpRequest.model_validate(["a@x.com"])
        with pytest.raises(ValidationError):
            SignUpRequest.model_validate(None)


class TestSignInRequest:
    def test_valid_body(self):
        assert SignInRequest.model_validate({"email": "a@x.com", "password": "p1"}).password == "p1"

    def test_missing_password(self):
        with pytest.raises(ValidationError):
            SignInRequest.model_validate({"email": "a@x.com"})

    def test_empty_email(self):
        with pytest.raises(ValidationError):
            SignInRequest.model_validate({"email": "", "password": "p1"})


class TestTransactionCreate:
    def test_upper_bound_is_inclusive(self):
        body = {"description": "x", "value": MAX_TRANSACTION_VALUE, "type": "income"}
        assert TransactionCreate.model_validate(body).value == MAX_TRANSACTION_VALUE

    @pytest.mark.parametrize("value", [0, -5, MAX_TRANSACTION_VALUE + 1, 2**63])
    def test_value_out_of_range(self, value):
        with pytest.raises(ValidationError):
            TransactionCreate.model_validate({"description": "x", "value": value, "type": "income"})
