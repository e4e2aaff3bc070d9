import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from solosphere.db import get_db
from solosphere.main import app


class FailingSession:
    """Stands in for an AsyncSession whose every query fails"""

    def __init__(self, error: Exception):
        self.error = error

    async def execute(self, *_args, **_kwargs):
        raise self.error


@pytest.fixture
def failing_db():
    def _install(error: Exception):
        async def _get_db():
            yield FailingSession(error)
        app.dependency_overrides[get_db] = _get_db
    yield _install
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_store_failure_maps_to_service_unavailable(failing_db):
    failing_db(OperationalError("SELECT jobs", {}, Exception("connection refused")))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/jobs")

    assert response.status_code == 503
    assert response.json() == {
        "error": "STORE_ERROR",
        "message": "The data store is unavailable. Please try again later.",
        "status_code": 503,
    }


@pytest.mark.asyncio
async def test_store_failure_during_listing(failing_db):
    failing_db(OperationalError("SELECT count", {}, Exception("timeout")))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/jobs-count", params={"search": "web"})

    assert response.status_code == 503
    assert response.json()["error"] == "STORE_ERROR"


@pytest.mark.asyncio
async def test_unexpected_failure_maps_to_internal_error(failing_db):
    failing_db(RuntimeError("boom"))

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/jobs")

    assert response.status_code == 500
    assert response.json() == {
        "error": "INTERNAL_SERVER_ERROR",
        "message": "An internal error occurred. Please try again later.",
    }
