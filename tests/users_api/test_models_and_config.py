"""
User codec, settings validation and database gateway helpers
"""

import asyncpg
import pytest
from contextlib import asynccontextmanager
from pydantic import ValidationError

from config.settings import Settings, get_settings
from database.connection import Database, DatabaseError, parse_affected_rows
from models.user import User


class TestUserModel:

    def test_round_trip(self):
        user = User(id=3, name="Ann", email="a@x.com")

        assert User.model_validate_json(user.model_dump_json()) == user

    def test_encodes_list(self):
        users = [User(id=1, name="Ann", email="a@x.com"), User(id=2)]

        assert [u.model_dump() for u in users] == [
            {"id": 1, "name": "Ann", "email": "a@x.com"},
            {"id": 2, "name": "", "email": ""},
        ]

    def test_lenient_decoding(self):
        user = User.model_validate_json('{"name": null, "nickname": "x"}')

        assert user == User(id=0, name="", email="")

    @pytest.mark.parametrize("raw", [
        '{"name": 1}',
        '{"id": "1"}',
        '{"id": true}',
        '[]',
    ])
    def test_wrong_types_are_malformed(self, raw):
        with pytest.raises(ValidationError):
            User.model_validate_json(raw)

    def test_from_record(self):
        assert User.from_record({"id": 4, "name": None, "email": "e@x.com"}) == User(id=4, email="e@x.com")


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("HOST", "PORT", "CORS_ALLOW_ORIGIN", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/users")

        settings = get_settings()

        assert settings.database_url == "postgresql://localhost/users"
        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.cors_allow_origin == "*"
        assert settings.log_level == "INFO"

    def test_database_url_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValueError, match="DATABASE_URL"):
            get_settings()

    def test_reports_every_problem(self):
        errors = Settings(database_url="", port=0, log_level="LOUD").validate()

        assert len(errors) == 3


class FakeConnection:

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def _answer(self, *args):
        if self.error:
            raise self.error
        return self.result

    fetch = fetchrow = execute = _answer


class FakePool:

    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        yield self.conn

    async def close(self):
        self.closed = True


class TestDatabase:

    @pytest.mark.parametrize("status,expected", [
        ("UPDATE 1", 1),
        ("DELETE 0", 0),
        ("INSERT 0 3", 3),
        ("CREATE TABLE", 0),
        ("", 0),
    ])
    def test_parse_affected_rows(self, status, expected):
        assert parse_affected_rows(status) == expected

    @pytest.mark.asyncio
    async def test_execute_returns_affected_count(self):
        db = Database(FakePool(FakeConnection(result="UPDATE 2")))

        assert await db.execute("UPDATE users SET name = $1", "x") == 2

    @pytest.mark.asyncio
    async def test_query_row_none_when_missing(self):
        db = Database(FakePool(FakeConnection(result=None)))

        assert await db.query_row("SELECT 1") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ConnectionRefusedError("refused"),
        asyncpg.InterfaceError("pool is closed"),
    ])
    async def test_driver_errors_become_database_error(self, error):
        db = Database(FakePool(FakeConnection(error=error)))

        with pytest.raises(DatabaseError):
            await db.query("SELECT id, name, email FROM users")

    @pytest.mark.asyncio
    async def test_close(self):
        pool = FakePool(FakeConnection())
        await Database(pool).close()

        assert pool.closed
