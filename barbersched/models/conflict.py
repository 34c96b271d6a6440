"""Schedule conflict models for barbersched."""

from datetime import date as Date
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class ConflictType(str, Enum):
    """Kind of scheduling inconsistency."""
    OVERLAP = "overlap"
    CAPACITY = "capacity"
    HOLIDAY = "holiday"
    TIMEOFF = "timeoff"
    BREAK = "break"


class ConflictSeverity(str, Enum):
    """How urgently a conflict needs operator attention."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScheduleConflict(BaseModel):
    """A detected scheduling inconsistency.

    Conflicts are regenerated on every detection run and never persisted.
    The id is derived from the conflicting records so identical input
    always yields identical ids.
    """
    
    id: str = Field(..., description="Deterministic conflict identifier")
    type: ConflictType = Field(..., description="Conflict type")
    severity: ConflictSeverity = Field(..., description="Conflict severity")
    date: Date = Field(..., description="Calendar day the conflict pertains to")
    time: Optional[str] = Field(None, description="Human-readable time or time range")
    barber_id: Optional[str] = Field(None, description="Affected barber")
    barber_name: Optional[str] = Field(None, description="Affected barber display name")
    description: str = Field(..., description="What is wrong")
    affected_appointments: Optional[int] = Field(None, description="Number of affected appointments")
    resolution: Optional[str] = Field(None, description="Suggested resolution")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class ConflictSummary(BaseModel):
    """Per-severity counts of a conflict list."""

    total: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    has_conflicts: bool = False
