"""Scheduling engine for barbersched."""

from barbersched.engine.keys import calendar_day, time_of_day, slot_key, split_slot_key, group_by, is_active
from barbersched.engine.conflicts import detect_conflicts, detect_snapshot_conflicts, sort_conflicts
from barbersched.engine.summary import summarize_conflicts, conflicts_by_severity
from barbersched.engine.time_off import (
    TimeOffValidationError,
    TimeOffTransitionError,
    validate_time_off_dates,
    find_overlapping_approved,
    summarize_time_off,
)

__all__ = [
    "calendar_day",
    "time_of_day",
    "slot_key",
    "split_slot_key",
    "group_by",
    "is_active",
    "detect_conflicts",
    "detect_snapshot_conflicts",
    "sort_conflicts",
    "summarize_conflicts",
    "conflicts_by_severity",
    "TimeOffValidationError",
    "TimeOffTransitionError",
    "validate_time_off_dates",
    "find_overlapping_approved",
    "summarize_time_off",
]
