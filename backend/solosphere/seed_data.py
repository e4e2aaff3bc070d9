"""
Seed database with sample jobs for local development
"""
import asyncio
from datetime import datetime, time, timedelta, timezone
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from .db import engine, init_models
from .logger import logger
from .models import Job

def sample_jobs(today: datetime = None):
    """Sample jobs spread over every category with staggered deadlines"""
    today = today or datetime.combine(datetime.now(timezone.utc).date(), time(), tzinfo=timezone.utc)
    buyer = {
        "buyer_email": "buyer@solosphere.io",
        "buyer_name": "Sample Buyer",
        "buyer_photo": "https://i.pravatar.cc/150?u=buyer@solosphere.io",
    }
    return [
        {
            "job_title": "Build a responsive landing page",
            "description": "Single page React site with a contact form.",
            "category": "Web Development",
            "deadline": today + timedelta(days=14),
            "price": 300.0,
            **buyer,
        },
        {
            "job_title": "Fix checkout bugs in web shop",
            "description": "Payment step fails for some card types.",
            "category": "Web Development",
            "deadline": today + timedelta(days=5),
            "price": 150.0,
            **buyer,
        },
        {
            "job_title": "Logo and brand kit",
            "description": "Logo, colour palette and two font pairings.",
            "category": "Graphics Design",
            "deadline": today + timedelta(days=21),
            "price": 220.0,
            **buyer,
        },
        {
            "job_title": "Social media banner set",
            "description": "Banners for four platforms in matching style.",
            "category": "Graphics Design",
            "deadline": today + timedelta(days=10),
            "price": 90.0,
            **buyer,
        },
        {
            "job_title": "SEO audit for a web store",
            "description": "Keyword research and an on-page audit report.",
            "category": "Digital Marketing",
            "deadline": today + timedelta(days=7),
            "price": 180.0,
            **buyer,
        },
        {
            "job_title": "Email campaign for product launch",
            "description": "Three-email sequence with A/B subject lines.",
            "category": "Digital Marketing",
            "deadline": today + timedelta(days=30),
            "price": 260.0,
            **buyer,
        },
    ]

async def seed_jobs(session: AsyncSession) -> int:
    """Insert the sample jobs unless the jobs table already has rows"""
    existing = (await session.execute(select(func.count()).select_from(Job))).scalar_one()
    if existing:
        logger.info(f"Skipping seed, {existing} jobs already present")
        return 0

    jobs = [Job(**data) for data in sample_jobs()]
    session.add_all(jobs)
    await session.commit()

    logger.info(f"Seeded {len(jobs)} sample jobs")
    return len(jobs)

async def main():
    """Main seed function"""
    await init_models()
    async with AsyncSession(engine) as session:
        await seed_jobs(session)
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(main())
