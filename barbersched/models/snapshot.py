"""ScheduleSnapshot model for barbersched."""

from datetime import date as Date
from typing import List, Optional
from pydantic import BaseModel, Field

from barbersched.models.appointment import Appointment
from barbersched.models.holiday import Holiday
from barbersched.models.time_off import TimeOffRequest
from barbersched.models.capacity import CapacityConfig


class ScheduleSnapshot(BaseModel):
    """Everything conflict detection needs for one barbershop and date range.

    All collections must come from the same barbershop and the same range;
    nothing here re-checks that.
    """

    barbershop_id: str
    start_date: Date
    end_date: Date
    barber_id: Optional[str] = None
    appointments: List[Appointment] = Field(default_factory=list)
    holidays: List[Holiday] = Field(default_factory=list)
    time_off_requests: List[TimeOffRequest] = Field(default_factory=list)
    capacity_config: Optional[CapacityConfig] = None
