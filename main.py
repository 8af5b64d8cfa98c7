"""
Personal finance API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as transactions_router
from auth.credentials import CredentialStore
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from auth.sessions import SessionStore
from config.settings import Settings, config
from database.session import Database

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database.from_settings(settings)
        if settings.create_tables_on_startup:
            await database.create_all()

        credentials = CredentialStore(database)
        sessions = SessionStore(
            database,
            token_bytes=settings.session_token_bytes,
            max_token_length=settings.max_token_length,
        )
        app.state.database = database
        app.state.credential_store = credentials
        app.state.session_store = sessions
        app.state.auth_service = AuthService(
            credentials=credentials,
            sessions=sessions,
            hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        )
        logger.info("Application ready to accept requests.")
        try:
            yield
        finally:
            await database.dispose()

    app = FastAPI(
        title="Personal Finance API",
        version="1.0.0",
        description="Accounts, sessions and transactions.",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(transactions_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
