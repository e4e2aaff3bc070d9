"""
Basic API tests for the SoloSphere API
"""
import pytest
from sqlalchemy import select

from solosphere.models import Job
from solosphere.seed_data import sample_jobs, seed_jobs

@pytest.mark.asyncio
async def test_health_check(client):
    """Test health endpoint"""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "solosphere-backend"}

@pytest.mark.asyncio
async def test_root_greeting(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.text.startswith("Hello from SoloSphere")

@pytest.mark.asyncio
async def test_seed_jobs_populates_empty_table_once(session_factory):
    async with session_factory() as session:
        assert await seed_jobs(session) == len(sample_jobs())

    async with session_factory() as session:
        assert await seed_jobs(session) == 0
        jobs = (await session.execute(select(Job))).scalars().all()

    assert len(jobs) == len(sample_jobs())
    assert {job.category for job in jobs} == {"Web Development", "Graphics Design", "Digital Marketing"}
    assert all(job.bid_count == 0 for job in jobs)

@pytest.mark.asyncio
async def test_validation_error_on_bad_job_body(client):
    response = await client.post("/job", json={"job_title": "No buyer"})
    assert response.status_code == 422

def test_log_records_carry_service_fields():
    import json
    import logging

    from solosphere.logger import logger

    record = logging.LogRecord("solosphere", logging.INFO, __file__, 1, "Job created: j-1", None, None)
    record.job_id = "j-1"
    payload = json.loads(logger.handlers[0].formatter.format(record))

    assert payload["message"] == "Job created: j-1"
    assert payload["level"] == "INFO"
    assert payload["service"] == "solosphere-backend"
    assert payload["environment"] == "development"
    assert payload["job_id"] == "j-1"
