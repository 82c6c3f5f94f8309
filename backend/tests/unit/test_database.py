import asyncio

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.db.database import Database, get_async_url, classify_integrity_error
from app.errors import ErrorType, PERSISTENCE_MESSAGES


class FakePostgresError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__("duplicate key value violates unique constraint \"user_email_key\"")
        self.sqlstate = sqlstate


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, orig)


class TestAsyncUrl:
    """Tests for database URL conversion."""

    @pytest.mark.parametrize("url, db_type, expected", [
        ("postgresql://u:p@host/db", "postgresql", "postgresql+asyncpg://u:p@host/db"),
        ("postgresql://u:p@host/db", "PostgreSQL", "postgresql+asyncpg://u:p@host/db"),
        ("mysql://u:p@host/db", "mysql", "mysql+aiomysql://u:p@host/db"),
        ("sqlite:///./app.db", "sqlite", "sqlite+aiosqlite:///./app.db"),
        ("oracle://u:p@host/db", "oracle", "oracle://u:p@host/db"),
    ])
    def test_conversion(self, url, db_type, expected):
        assert get_async_url(url, db_type) == expected


class TestErrorTranslation:
    """Tests for mapping driver errors to structured error types."""

    @pytest.mark.parametrize("sqlstate, expected", [
        ("23505", ErrorType.UNIQUE_VIOLATION),
        ("23503", ErrorType.FOREIGN_KEY_VIOLATION),
        ("23502", ErrorType.NOT_NULL_VIOLATION),
    ])
    def test_postgres_sqlstate(self, sqlstate, expected):
        assert classify_integrity_error(integrity_error(FakePostgresError(sqlstate))) == expected

    @pytest.mark.parametrize("message, expected", [
        ("UNIQUE constraint failed: user.email", ErrorType.UNIQUE_VIOLATION),
        ("FOREIGN KEY constraint failed", ErrorType.FOREIGN_KEY_VIOLATION),
        ("NOT NULL constraint failed: film.director", ErrorType.NOT_NULL_VIOLATION),
    ])
    def test_sqlite_messages(self, message, expected):
        assert classify_integrity_error(integrity_error(Exception(message))) == expected

    def test_mysql_errno(self):
        orig = Exception(1062, "Duplicate entry 'a@b.c' for key 'email'")
        assert classify_integrity_error(integrity_error(orig)) == ErrorType.UNIQUE_VIOLATION

    def test_unknown_integrity_error(self):
        assert classify_integrity_error(integrity_error(Exception("CHECK constraint failed"))) is None

    def test_translate_known_violation(self):
        db = Database("sqlite://", "sqlite")

        exc = db.translate_error(integrity_error(Exception("UNIQUE constraint failed: user.email")))

        assert exc.error_type == ErrorType.UNIQUE_VIOLATION
        assert exc.message == PERSISTENCE_MESSAGES[ErrorType.UNIQUE_VIOLATION]
        assert "user.email" not in exc.message

    def test_translate_uses_fallback(self):
        db = Database("sqlite://", "sqlite")
        error = OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        assert db.translate_error(error).error_type == ErrorType.PERSISTENCE_ERROR
        assert db.translate_error(error, fallback=ErrorType.CREATION_FAILED).error_type == ErrorType.CREATION_FAILED


class TestSessions:
    """Tests for session handling on in-memory SQLite."""

    @pytest.mark.asyncio
    async def test_in_memory_sessions_do_not_overlap(self):
        db = Database("sqlite://", "sqlite")
        events = []

        async def use_session(name: str):
            async with db.session():
                events.append(f"{name} open")
                await asyncio.sleep(0)
                events.append(f"{name} close")

        await asyncio.gather(use_session("a"), use_session("b"))
        await db.disconnect()

        assert events == ["a open", "a close", "b open", "b close"]
