"""Appointment data model for barbersched."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Appointment(BaseModel):
    """A booked appointment for one barber."""
    
    id: str = Field(..., description="Unique appointment identifier")
    barbershop_id: str = Field(..., description="Barbershop that owns this appointment")
    barber_id: str = Field(..., description="Barber providing the service")
    barber_name: Optional[str] = Field(None, description="Barber display name")
    customer_name: str = Field(..., description="Customer display name")
    service_name: str = Field(..., description="Name of the booked service")
    start_time: datetime = Field(..., description="Appointment start timestamp")
    end_time: datetime = Field(..., description="Appointment end timestamp")
    status: AppointmentStatus = Field(AppointmentStatus.PENDING, description="Appointment status")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True
