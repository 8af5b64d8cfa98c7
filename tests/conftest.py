"""
Shared fixtures: a throw-away SQLite database, the stores built on it, and
an app wired to the same settings.
"""

import pytest
from fastapi.testclient import TestClient

from auth.credentials import CredentialStore
from auth.password import PasswordHasher
from auth.service import AuthService
from auth.sessions import SessionStore
from config.settings import Settings
from database.session import Database


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}",
        bcrypt_rounds=4,
        create_tables_on_startup=True,
    )


@pytest.fixture
async def db(settings):
    database = Database.from_settings(settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def credentials(db):
    return CredentialStore(db)


@pytest.fixture
def sessions(db):
    return SessionStore(db)


@pytest.fixture
def service(credentials, sessions, hasher):
    return AuthService(credentials=credentials, sessions=sessions, hasher=hasher)


@pytest.fixture
def client(settings):
    from main import create_app

    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def sign_up_body():
    return {
        "name": "A",
        "email": "a@x.com",
        "password": "p1",
        "repeatPassword": "p1",
    }
