import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from solosphere.auth import create_access_token
from solosphere.db import get_db, init_models
from solosphere.main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(email: str) -> dict:
        return {"Cookie": f"token={create_access_token(email)}"}
    return _headers


@pytest.fixture
def job_payload():
    return _job_payload


@pytest.fixture
def bid_payload():
    return _bid_payload


@pytest.fixture
def create_job(client):
    async def _create(**overrides) -> dict:
        response = await client.post("/job", json=_job_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _create


def _job_payload(**overrides) -> dict:
    payload = {
        "job_title": "Build a web scraper",
        "description": "Collect prices from three shops.",
        "category": "Web Development",
        "deadline": "2026-12-01",
        "price": 200,
        "buyer": {"email": "buyer@solosphere.io", "name": "Bea Buyer", "photo": None},
    }
    payload.update(overrides)
    return payload


def _bid_payload(job: dict, **overrides) -> dict:
    payload = {
        "jobId": job["_id"],
        "email": "a@x.com",
        "price": 180,
        "comment": "Can start today.",
        "deadline": job["deadline"],
        "job_title": job["job_title"],
        "category": job["category"],
        "buyer": job["buyer"],
    }
    payload.update(overrides)
    return payload
