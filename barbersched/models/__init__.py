"""Data models for barbersched."""

from barbersched.models.barbershop import Barbershop, Barber
from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.models.holiday import Holiday, HolidayCustomHours, BreakPeriod
from barbersched.models.time_off import TimeOffRequest, TimeOffStatus, TimeOffStats
from barbersched.models.capacity import CapacityConfig
from barbersched.models.conflict import ScheduleConflict, ConflictType, ConflictSeverity, ConflictSummary
from barbersched.models.snapshot import ScheduleSnapshot

__all__ = [
    "Barbershop",
    "Barber",
    "Appointment",
    "AppointmentStatus",
    "Holiday",
    "HolidayCustomHours",
    "BreakPeriod",
    "TimeOffRequest",
    "TimeOffStatus",
    "TimeOffStats",
    "CapacityConfig",
    "ScheduleConflict",
    "ConflictType",
    "ConflictSeverity",
    "ConflictSummary",
    "ScheduleSnapshot",
]
