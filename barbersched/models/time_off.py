"""Time-off request data model for barbersched."""

from datetime import date as Date, datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class TimeOffStatus(str, Enum):
    """Time-off request status enumeration."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class TimeOffRequest(BaseModel):
    """A barber's request to be unavailable over an inclusive date range."""
    
    id: str = Field(..., description="Unique request identifier")
    barber_id: str = Field(..., description="Barber requesting time off")
    barber_name: Optional[str] = Field(None, description="Barber display name")
    start_date: Date = Field(..., description="First day off (inclusive)")
    end_date: Date = Field(..., description="Last day off (inclusive)")
    status: TimeOffStatus = Field(TimeOffStatus.PENDING, description="Request status")
    reason: str = Field("", description="Reason given by the barber")
    notes: Optional[str] = Field(None, description="Additional notes")
    reviewed_by: Optional[str] = Field(None, description="Who approved or rejected the request")
    reviewed_at: Optional[datetime] = Field(None, description="When the request was reviewed")
    review_notes: Optional[str] = Field(None, description="Approval notes or rejection reason")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TimeOffStats(BaseModel):
    """Per-barber request counts and day totals for one calendar year."""

    barber_id: str
    year: int
    total_requests: int = 0
    pending_requests: int = 0
    approved_requests: int = 0
    rejected_requests: int = 0
    days_requested: int = 0
    days_approved: int = 0
