"""Holiday data model for barbersched."""

from datetime import date as Date
from typing import List, Optional
from pydantic import BaseModel, Field


class BreakPeriod(BaseModel):
    """A break inside special opening hours."""

    start: str = Field(..., description="Break start (HH:MM)")
    end: str = Field(..., description="Break end (HH:MM)")


class HolidayCustomHours(BaseModel):
    """Special opening hours for a holiday on which the shop stays open."""

    start: Optional[str] = Field(None, description="Opening time (HH:MM)")
    end: Optional[str] = Field(None, description="Closing time (HH:MM)")
    breaks: List[BreakPeriod] = Field(default_factory=list, description="Breaks during the day")


class Holiday(BaseModel):
    """A barbershop-wide calendar-day closure or special-hours override."""
    
    id: str = Field(..., description="Unique holiday identifier")
    barbershop_id: str = Field(..., description="Barbershop this holiday applies to")
    date: Date = Field(..., description="Calendar day of the holiday")
    reason: str = Field(..., description="Human-readable reason")
    custom_hours: Optional[HolidayCustomHours] = Field(
        None,
        description="Special hours; when absent the shop is closed all day",
    )

    @property
    def closes_shop(self) -> bool:
        """Whether the shop is fully closed on this day."""
        return self.custom_hours is None
