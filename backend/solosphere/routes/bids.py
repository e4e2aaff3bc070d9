"""
Bid routes - placing bids and managing their status
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from ..db import get_db
from ..models import Bid
from ..schemas import BidCreate, BidOut, BidStatusUpdate, Buyer, TokenIdentity
from ..auth import require_path_owner
from ..services.bids import place_bid, update_bid_status

router = APIRouter(tags=["Bids"])

def _bid_to_out(bid: Bid) -> BidOut:
    """Convert Bid model to BidOut schema"""
    return BidOut(
        id=bid.id,
        jobId=bid.job_id,
        email=bid.email,
        status=bid.status,
        price=bid.price,
        comment=bid.comment,
        deadline=bid.deadline,
        job_title=bid.job_title,
        category=bid.category,
        buyer=Buyer(
            email=bid.buyer_email,
            name=bid.buyer_name,
            photo=bid.buyer_photo
        ) if bid.buyer_email else None,
    )

@router.post("/bid", response_model=BidOut, status_code=201)
async def create_bid(request: BidCreate, db: AsyncSession = Depends(get_db)):
    """Place a bid on a job; a second bid on the same job is rejected"""
    bid = await place_bid(db, request)
    return _bid_to_out(bid)

@router.get("/my-bids/{email}", response_model=List[BidOut])
async def get_my_bids(
    email: str,
    identity: TokenIdentity = Depends(require_path_owner),
    db: AsyncSession = Depends(get_db)
):
    """Get bids placed by a seller"""
    result = await db.execute(select(Bid).filter(Bid.email == identity.email))
    return [_bid_to_out(bid) for bid in result.scalars().all()]

@router.get("/bid-requests/{email}", response_model=List[BidOut])
async def get_bid_requests(
    email: str,
    identity: TokenIdentity = Depends(require_path_owner),
    db: AsyncSession = Depends(get_db)
):
    """Get bids received on a buyer's jobs"""
    result = await db.execute(select(Bid).filter(Bid.buyer_email == identity.email))
    return [_bid_to_out(bid) for bid in result.scalars().all()]

@router.patch("/bid/{bid_id}", response_model=BidOut)
async def patch_bid_status(bid_id: str, request: BidStatusUpdate, db: AsyncSession = Depends(get_db)):
    """Set a bid's status"""
    bid = await update_bid_status(db, bid_id, request.status)
    return _bid_to_out(bid)
