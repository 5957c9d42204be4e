"""
Application startup: database bootstrap and route table
"""

import pytest

import app as app_module
from app import create_app
from database.connection import DatabaseError
from services.users_service import CREATE_USERS_TABLE
from .fakes import InMemoryDatabase


class TestLifespan:

    @pytest.mark.asyncio
    async def test_opens_database_and_creates_table(self, settings, monkeypatch):
        fake_db = InMemoryDatabase()
        opened = []

        async def fake_init_database(dsn):
            opened.append(dsn)
            return fake_db

        monkeypatch.setattr(app_module, "init_database", fake_init_database)
        app = create_app(settings)

        async with app.router.lifespan_context(app):
            assert app.state.db is fake_db
            assert opened == [settings.database_url]
            assert fake_db.statements == [CREATE_USERS_TABLE]

        assert fake_db.closed
        assert app.state.db is None

    @pytest.mark.asyncio
    async def test_table_failure_aborts_startup(self, settings, monkeypatch):
        fake_db = InMemoryDatabase()
        fake_db.fail_on(CREATE_USERS_TABLE, "permission denied")

        async def fake_init_database(dsn):
            return fake_db

        monkeypatch.setattr(app_module, "init_database", fake_init_database)
        app = create_app(settings)

        with pytest.raises(DatabaseError):
            async with app.router.lifespan_context(app):
                pass

        assert fake_db.closed

    @pytest.mark.asyncio
    async def test_connection_failure_aborts_startup(self, settings, monkeypatch):
        async def fake_init_database(dsn):
            raise DatabaseError("could not connect")

        monkeypatch.setattr(app_module, "init_database", fake_init_database)
        app = create_app(settings)

        with pytest.raises(DatabaseError):
            async with app.router.lifespan_context(app):
                pass

    @pytest.mark.asyncio
    async def test_injected_database_is_left_alone(self, settings, fake_db):
        app = create_app(settings, db=fake_db)

        async with app.router.lifespan_context(app):
            assert app.state.db is fake_db

        assert not fake_db.closed
        assert fake_db.statements == []


def test_route_table(app):
    routes = {
        (method, route.path)
        for route in app.routes
        for method in getattr(route, "methods", None) or ()
    }

    assert {
        ("GET", "/api/go/users"),
        ("POST", "/api/go/users"),
        ("GET", "/api/go/users/{user_id}"),
        ("PUT", "/api/go/users/{user_id}"),
        ("DELETE", "/api/go/users/{user_id}"),
        ("GET", "/health"),
    } <= routes
