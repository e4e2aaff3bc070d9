import uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, UniqueConstraint, func
Base = declarative_base()

def _new_id() -> str:
    return str(uuid.uuid4())

class Job(Base):
    __tablename__ = "jobs"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    job_title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    deadline = Column(DateTime(timezone=True), nullable=False)
    price = Column(Float, nullable=False)
    buyer_email = Column(String, nullable=False, index=True)
    buyer_name = Column(String, nullable=True)
    buyer_photo = Column(String, nullable=True)
    bid_count = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

class Bid(Base):
    __tablename__ = "bids"
    # one bid per seller per job
    __table_args__ = (UniqueConstraint("email", "job_id", name="uq_bids_email_job_id"),)

    id = Column(String, primary_key=True, index=True, default=_new_id)
    job_id = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False, default="Pending")
    job_title = Column(String, nullable=True)
    deadline = Column(DateTime(timezone=True), nullable=True)
    price = Column(Float, nullable=True)
    category = Column(String, nullable=True)
    comment = Column(Text, nullable=True)
    buyer_email = Column(String, nullable=True, index=True)
    buyer_name = Column(String, nullable=True)
    buyer_photo = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
