import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.errors import ErrorType, PERSISTENCE_MESSAGES
from app.exceptions import AppException

logger = logging.getLogger(__name__)


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):

    def to_dict(self) -> dict[str, Any]:
        """Column values of the row, keyed by attribute name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


def get_async_url(url: str, db_type: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    db_type = db_type.lower()
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif db_type == "mysql":
        return url.replace("mysql://", "mysql+aiomysql://")
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# SQLSTATE codes (PostgreSQL) and error numbers (MySQL) of known constraint violations
SQLSTATE_ERRORS = {
    "23505": ErrorType.UNIQUE_VIOLATION,
    "23503": ErrorType.FOREIGN_KEY_VIOLATION,
    "23502": ErrorType.NOT_NULL_VIOLATION,
}
MYSQL_ERRNO_ERRORS = {
    1062: ErrorType.UNIQUE_VIOLATION,
    1452: ErrorType.FOREIGN_KEY_VIOLATION,
    1048: ErrorType.NOT_NULL_VIOLATION,
}
# SQLite only reports constraint violations through the message text
SQLITE_MESSAGE_ERRORS = {
    "UNIQUE constraint failed": ErrorType.UNIQUE_VIOLATION,
    "FOREIGN KEY constraint failed": ErrorType.FOREIGN_KEY_VIOLATION,
    "NOT NULL constraint failed": ErrorType.NOT_NULL_VIOLATION,
}


def classify_integrity_error(exc: IntegrityError) -> ErrorType | None:
    """Map a driver integrity error to a structured error type, if known."""
    orig = exc.orig
    cause = getattr(orig, "__cause__", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None) or getattr(cause, "sqlstate", None)
    if code in SQLSTATE_ERRORS:
        return SQLSTATE_ERRORS[code]

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in MYSQL_ERRNO_ERRORS:
        return MYSQL_ERRNO_ERRORS[args[0]]

    text = str(orig)
    for marker, error_type in SQLITE_MESSAGE_ERRORS.items():
        if marker in text:
            return error_type
    return None


class Database:
    """Persistence gateway: owns the engine and hands out sessions.

    Constructed once at startup and shared by every request; torn down at
    shutdown with disconnect().
    """

    def __init__(self, url: str, db_type: str):
        self.url = get_async_url(url, db_type)
        self.db_type = db_type.lower()
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        # Set when every session shares one connection (in-memory SQLite)
        self._session_lock: asyncio.Lock | None = None

    async def connect(self):
        """Create database engine and session factory."""
        if self.engine:
            return

        options: dict[str, Any] = {"echo": False}
        if self.db_type == "sqlite" and (":memory:" in self.url or self.url.endswith("://")):
            # An in-memory database only lives as long as its single connection
            options["poolclass"] = StaticPool
            self._session_lock = asyncio.Lock()

        self.engine = create_async_engine(self.url, **options)
        if self.db_type == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Connected to {self.db_type} database")

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            self._session_lock = None

    async def create_all(self):
        """Create every table known to the ORM metadata."""
        # Registers the mapped classes on Base.metadata
        import app.models  # noqa: F401

        await self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if not self.session_factory:
            await self.connect()

        if self._session_lock is None:
            async with self.session_factory() as session:
                yield session
            return

        # Concurrent transactions on a shared connection would roll back each other
        async with self._session_lock:
            async with self.session_factory() as session:
                yield session

    def translate_error(
        self,
        exc: SQLAlchemyError,
        fallback: ErrorType = ErrorType.PERSISTENCE_ERROR
    ) -> AppException:
        """Turn a storage error into an AppException with a stable message."""
        error_type = None
        if isinstance(exc, IntegrityError):
            error_type = classify_integrity_error(exc)
        error_type = error_type or fallback

        message = PERSISTENCE_MESSAGES.get(error_type, PERSISTENCE_MESSAGES[ErrorType.PERSISTENCE_ERROR])
        logger.error(f"Database error ({error_type.value}): {message}")
        logger.debug(f"Driver error: {exc}")
        return AppException(error_type, message)


def get_db(request: Request) -> Database:
    """Dependency returning the gateway created in the app lifespan."""
    return request.app.state.db
