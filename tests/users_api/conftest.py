"""
pytest configuration and fixtures for the users API test suite
The app runs in-process over httpx's ASGI transport against an in-memory database.
"""

import pytest
import pytest_asyncio
import httpx

from app import create_app
from config.settings import Settings
from .fakes import InMemoryDatabase


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="postgresql://test@localhost/test", cors_allow_origin="*")


@pytest.fixture
def fake_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def app(settings, fake_db):
    return create_app(settings, db=fake_db)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
