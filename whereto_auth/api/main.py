"""WhereTo accounts - FastAPI Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whereto_auth import __version__, config
from whereto_auth.api.errors import register_error_handlers
from whereto_auth.api.routes import auth, health, profile
from whereto_auth.domain.ports import CredentialStore, Notifier
from whereto_auth.domain.services import PasswordHasher, ResetTokenCodec, SmtpNotifier
from whereto_auth.storage.database import Database
from whereto_auth.storage.repository import SqlCredentialStore

logger = logging.getLogger(__name__)


def create_app(
    database: Database | None = None,
    store: CredentialStore | None = None,
    notifier: Notifier | None = None,
    hasher: PasswordHasher | None = None,
    codec: ResetTokenCodec | None = None,
    jwt_secret_key: str = config.JWT_SECRET_KEY,
    app_url: str = config.APP_URL,
) -> FastAPI:
    """Build the application around explicitly supplied collaborators.

    With no store given, a SQL store over ``database`` is used, and the
    lifespan connects and closes that database.
    """
    if store is None:
        database = database or Database()
        store = SqlCredentialStore(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        logger.info("Starting WhereTo accounts %s", __version__)
        if database is not None:
            await database.connect()
            await database.init_schema()
        yield
        # Shutdown
        if database is not None:
            await database.close()

    app = FastAPI(
        title="WhereTo Accounts",
        description="Account registration, login and password reset",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.store = store
    app.state.hasher = hasher or PasswordHasher()
    app.state.codec = codec or ResetTokenCodec()
    app.state.notifier = notifier or SmtpNotifier()
    app.state.jwt_secret_key = jwt_secret_key
    app.state.app_url = app_url.rstrip("/")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router)
    app.include_router(profile.router)
    return app


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
