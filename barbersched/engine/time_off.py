"""Time-off request rules.

Date validation, overlap checks against approved requests, allowed status
transitions (pending -> approved | rejected, pending/approved -> cancelled)
and yearly per-barber totals.
"""

from datetime import date
from typing import Iterable, List, Optional, Tuple

from barbersched.models.time_off import TimeOffRequest, TimeOffStatus, TimeOffStats


class TimeOffValidationError(ValueError):
    """Requested dates are not acceptable."""


class TimeOffTransitionError(ValueError):
    """Requested status change is not allowed from the current status."""


def validate_time_off_dates(start_date: date, end_date: date, today: date) -> None:
    """Raise TimeOffValidationError for a backwards or past range."""
    if end_date < start_date:
        raise TimeOffValidationError("End date must be on or after start date")
    if start_date < today:
        raise TimeOffValidationError("Time off cannot start in the past")


def day_count(start_date: date, end_date: date) -> int:
    """Number of days in an inclusive range."""
    return (end_date - start_date).days + 1


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Whether two inclusive date ranges share at least one day."""
    return a_start <= b_end and b_start <= a_end


def find_overlapping_approved(
    barber_id: str,
    start_date: date,
    end_date: date,
    existing: Iterable[TimeOffRequest],
    exclude_id: Optional[str] = None,
) -> List[TimeOffRequest]:
    """Approved requests of the same barber that share a day with the range."""
    return [
        req
        for req in existing
        if req.barber_id == barber_id
        and req.status == TimeOffStatus.APPROVED
        and req.id != exclude_id
        and ranges_overlap(req.start_date, req.end_date, start_date, end_date)
    ]


def check_can_review(request: TimeOffRequest) -> None:
    """Only pending requests can be approved or rejected."""
    if request.status != TimeOffStatus.PENDING:
        raise TimeOffTransitionError("Only pending requests can be approved or rejected")


def check_can_cancel(request: TimeOffRequest, today: date) -> None:
    """Rejected/cancelled requests and time off already underway cannot be cancelled."""
    if request.status in (TimeOffStatus.REJECTED, TimeOffStatus.CANCELLED):
        raise TimeOffTransitionError("Request was already rejected or cancelled")
    if request.status == TimeOffStatus.APPROVED and request.start_date <= today:
        raise TimeOffTransitionError("Approved time off that has already started cannot be cancelled")


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def summarize_time_off(barber_id: str, year: int, requests: Iterable[TimeOffRequest]) -> TimeOffStats:
    """Count a barber's requests lying wholly inside `year`, by status.

    Requests crossing a year boundary are left out. Every request adds its
    days to days_requested, approved ones to days_approved too.
    """
    first_day, last_day = year_bounds(year)
    stats = TimeOffStats(barber_id=barber_id, year=year)

    for req in requests:
        if req.barber_id != barber_id or req.start_date < first_day or req.end_date > last_day:
            continue
        days = day_count(req.start_date, req.end_date)
        stats.total_requests += 1
        stats.days_requested += days
        if req.status == TimeOffStatus.PENDING:
            stats.pending_requests += 1
        elif req.status == TimeOffStatus.APPROVED:
            stats.approved_requests += 1
            stats.days_approved += days
        elif req.status == TimeOffStatus.REJECTED:
            stats.rejected_requests += 1

    return stats
