"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, ValidationError, field_validator
from typing import Optional
from datetime import datetime, timezone
from enum import Enum

# ===== Common Schemas =====

class HealthResponse(BaseModel):
    status: str
    service: str

class SuccessResponse(BaseModel):
    success: bool = True

class DeleteResult(BaseModel):
    deletedCount: int

class JobsCount(BaseModel):
    count: int

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Deadlines are instants. The browser sends a date picker's local midnight as
    a UTC timestamp, so the offset is kept and normalized to UTC, never cut off.
    Naive values (date-only input, SQLite reads) are taken as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

_email_adapter = TypeAdapter(EmailStr)

def normalize_email(value: str) -> str:
    """Normalize an email the way EmailStr fields store it; invalid input is returned as-is"""
    try:
        return _email_adapter.validate_python(value)
    except ValidationError:
        return value

# ===== Auth Schemas =====

class TokenRequest(BaseModel):
    email: EmailStr

class TokenIdentity(BaseModel):
    email: str

# ===== Job Schemas =====

class JobCategory(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    GRAPHICS_DESIGN = "Graphics Design"
    DIGITAL_MARKETING = "Digital Marketing"

class Buyer(BaseModel):
    email: EmailStr
    name: Optional[str] = None
    photo: Optional[str] = None

class JobCreate(BaseModel):
    job_title: str = Field(min_length=1)
    description: Optional[str] = None
    category: JobCategory
    deadline: datetime
    price: float = Field(ge=0)
    buyer: Buyer
    bid_count: int = Field(0, ge=0)

    @field_validator("deadline")
    @classmethod
    def _normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class JobOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    job_title: str
    description: Optional[str] = None
    category: str
    deadline: datetime
    price: float
    buyer: Buyer
    bid_count: int = 0

    @field_validator("deadline")
    @classmethod
    def _normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

# ===== Bid Schemas =====

class BidStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"
    REJECTED = "Rejected"

class BidCreate(BaseModel):
    jobId: str = Field(min_length=1)
    email: EmailStr
    price: float = Field(ge=0)
    comment: Optional[str] = None
    deadline: Optional[datetime] = None
    job_title: Optional[str] = None
    category: Optional[str] = None
    status: str = BidStatus.PENDING.value
    buyer: Optional[Buyer] = None

    @field_validator("deadline")
    @classmethod
    def _normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class BidOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    jobId: str
    email: str
    status: str
    price: Optional[float] = None
    comment: Optional[str] = None
    deadline: Optional[datetime] = None
    job_title: Optional[str] = None
    category: Optional[str] = None
    buyer: Optional[Buyer] = None

    @field_validator("deadline")
    @classmethod
    def _normalize_deadline(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class BidStatusUpdate(BaseModel):
    """Any non-empty status is stored as given; no transition rules apply."""
    status: str = Field(min_length=1)
