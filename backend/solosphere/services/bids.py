from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import BidNotFoundError, DuplicateBidError
from ..logger import logger
from ..models import Bid, Job
from ..schemas import BidCreate


async def find_bid(db: AsyncSession, *, email: str, job_id: str) -> Bid | None:
    result = await db.execute(select(Bid).filter(Bid.email == email, Bid.job_id == job_id))
    return result.scalar_one_or_none()


async def place_bid(db: AsyncSession, data: BidCreate) -> Bid:
    """
    Store a bid and bump the parent job's bid_count in one transaction.

    A second bid for the same (email, jobId) raises DuplicateBidError whether
    it is caught by the lookup or by the unique constraint at commit; in both
    cases nothing is written.
    """
    if await find_bid(db, email=data.email, job_id=data.jobId) is not None:
        raise DuplicateBidError()

    buyer = data.buyer
    bid = Bid(
        job_id=data.jobId,
        email=data.email,
        status=data.status,
        price=data.price,
        comment=data.comment,
        deadline=data.deadline,
        job_title=data.job_title,
        category=data.category,
        buyer_email=buyer.email if buyer else None,
        buyer_name=buyer.name if buyer else None,
        buyer_photo=buyer.photo if buyer else None,
    )
    db.add(bid)

    bumped = await db.execute(
        update(Job)
        .where(Job.id == data.jobId)
        .values(bid_count=Job.bid_count + 1)
        .execution_options(synchronize_session=False)
    )

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateBidError()

    await db.refresh(bid)

    if bumped.rowcount == 0:
        logger.warning(f"Bid {bid.id} references unknown job {data.jobId}")

    logger.info(
        f"Bid placed: {bid.id}",
        extra={"bid_id": bid.id, "job_id": bid.job_id, "bidder": bid.email},
    )
    return bid


async def update_bid_status(db: AsyncSession, bid_id: str, status: str) -> Bid:
    """Set a bid's status as given; any status may follow any other."""
    result = await db.execute(select(Bid).filter(Bid.id == bid_id))
    bid = result.scalar_one_or_none()
    if bid is None:
        raise BidNotFoundError(bid_id)

    previous = bid.status
    bid.status = status
    await db.commit()
    await db.refresh(bid)

    logger.info(
        f"Bid {bid_id} status changed",
        extra={"bid_id": bid_id, "from_status": previous, "to_status": status},
    )
    return bid
