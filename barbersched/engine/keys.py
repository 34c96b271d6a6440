"""Grouping keys for conflict detection.

Keys are plain strings built from the timestamp's own wall-clock value.
No time-zone conversion happens here: an appointment stored as 23:30-03:00
belongs to that local day, not to the next UTC day.
"""

from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.models.constants import DATE_FORMAT, TIME_FORMAT

T = TypeVar("T")
K = TypeVar("K")


def calendar_day(ts: datetime) -> str:
    """Canonical yyyy-MM-dd day of a timestamp."""
    return ts.strftime(DATE_FORMAT)


def format_day(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def time_of_day(ts: datetime) -> str:
    """HH:MM of a timestamp (seconds truncated, not rounded)."""
    return ts.strftime(TIME_FORMAT)


def slot_key(ts: datetime) -> str:
    """Capacity grouping key: "yyyy-MM-dd HH:MM" of the start time."""
    return f"{calendar_day(ts)} {time_of_day(ts)}"


def split_slot_key(key: str) -> Tuple[str, str]:
    """Split a slot key back into (day, time)."""
    day, time = key.split(" ", 1)
    return day, time


def group_by(items: Iterable[T], key_fn: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group items by key, preserving first-seen key order and item order."""
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups


def is_active(appointment: Appointment) -> bool:
    """Cancelled appointments never take part in conflict checks."""
    return appointment.status != AppointmentStatus.CANCELLED
