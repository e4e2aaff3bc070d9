"""
Job routes - posting, browsing and the paginated listing
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select
from typing import List, Optional

from ..db import get_db
from ..models import Job
from ..schemas import Buyer, DeleteResult, JobCreate, JobOut, JobsCount, TokenIdentity
from ..auth import ensure_owner, get_current_identity, require_path_owner
from ..exceptions import JobNotFoundError
from ..services.listing import DEFAULT_PAGE_SIZE, build_listing_query, count_jobs, list_jobs_page
from ..logger import logger

router = APIRouter(tags=["Jobs"])

def _job_to_out(job: Job) -> JobOut:
    """Convert Job model to JobOut schema"""
    return JobOut(
        id=job.id,
        job_title=job.job_title,
        description=job.description,
        category=job.category,
        deadline=job.deadline,
        price=job.price,
        buyer=Buyer(email=job.buyer_email, name=job.buyer_name, photo=job.buyer_photo),
        bid_count=job.bid_count or 0,
    )

def _apply_job_fields(job: Job, data: JobCreate) -> None:
    job.job_title = data.job_title
    job.description = data.description
    job.category = data.category.value
    job.deadline = data.deadline
    job.price = data.price
    job.buyer_email = data.buyer.email
    job.buyer_name = data.buyer.name
    job.buyer_photo = data.buyer.photo

async def _get_job(db: AsyncSession, job_id: str) -> Optional[Job]:
    result = await db.execute(select(Job).filter(Job.id == job_id))
    return result.scalar_one_or_none()

@router.get("/jobs", response_model=List[JobOut])
async def get_jobs(db: AsyncSession = Depends(get_db)):
    """Get all jobs"""
    result = await db.execute(select(Job))
    return [_job_to_out(job) for job in result.scalars().all()]

@router.get("/job/{job_id}", response_model=JobOut)
async def get_job(job_id: str, db: AsyncSession = Depends(get_db)):
    """Get a single job"""
    job = await _get_job(db, job_id)
    if not job:
        raise JobNotFoundError(job_id)
    return _job_to_out(job)

@router.post("/job", response_model=JobOut, status_code=201)
async def create_job(request: JobCreate, db: AsyncSession = Depends(get_db)):
    """Post a new job"""
    job = Job(bid_count=request.bid_count)
    _apply_job_fields(job, request)

    db.add(job)
    await db.commit()
    await db.refresh(job)

    logger.info(f"Job created: {job.id}", extra={"job_id": job.id, "buyer": job.buyer_email})

    return _job_to_out(job)

@router.put("/job/{job_id}", response_model=JobOut)
async def update_job(
    job_id: str,
    request: JobCreate,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """Replace a job, creating it under this id if it does not exist"""
    job = await _get_job(db, job_id)

    # buyer email never changes once the job exists
    if job is not None:
        ensure_owner(identity, job.buyer_email)
    ensure_owner(identity, request.buyer.email)

    if job is None:
        job = Job(id=job_id, bid_count=request.bid_count)
        db.add(job)
    _apply_job_fields(job, request)

    await db.commit()
    await db.refresh(job)

    logger.info(f"Job updated: {job_id}", extra={"job_id": job_id, "buyer": identity.email})

    return _job_to_out(job)

@router.delete("/job/{job_id}", response_model=DeleteResult)
async def delete_job(job_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a job; bids placed on it are left in place"""
    result = await db.execute(delete(Job).where(Job.id == job_id))
    await db.commit()

    logger.info(f"Job deleted: {job_id}", extra={"job_id": job_id, "deleted": result.rowcount})

    return DeleteResult(deletedCount=result.rowcount)

@router.get("/jobs/{email}", response_model=List[JobOut])
async def get_buyer_jobs(
    email: str,
    identity: TokenIdentity = Depends(require_path_owner),
    db: AsyncSession = Depends(get_db)
):
    """Get all jobs posted by a buyer"""
    result = await db.execute(select(Job).filter(Job.buyer_email == identity.email))
    return [_job_to_out(job) for job in result.scalars().all()]

@router.get("/all-jobs", response_model=List[JobOut])
async def get_all_jobs(
    size: int = Query(DEFAULT_PAGE_SIZE),
    page: int = Query(1),
    category: Optional[str] = Query(None, alias="filter"),
    sort: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Get one page of jobs with search, category filter and deadline sort"""
    query = build_listing_query(search=search, category=category, sort=sort, page=page, size=size)
    jobs = await list_jobs_page(db, query)
    return [_job_to_out(job) for job in jobs]

@router.get("/jobs-count", response_model=JobsCount)
async def get_jobs_count(
    category: Optional[str] = Query(None, alias="filter"),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Count jobs matching the listing search and category filter"""
    return JobsCount(count=await count_jobs(db, search=search, category=category))
