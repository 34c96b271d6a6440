"""Schedule conflict detection for barbersched.

Turns a snapshot of appointments, holidays, time-off requests and capacity
configuration into an ordered list of conflicts. Detection is a pure
function of its inputs: no I/O, no mutation, same input -> same output
(including conflict ids and order).
"""

import logging
from typing import List, Optional, Sequence

from barbersched.models.appointment import Appointment
from barbersched.models.holiday import Holiday
from barbersched.models.time_off import TimeOffRequest, TimeOffStatus
from barbersched.models.capacity import CapacityConfig
from barbersched.models.conflict import ScheduleConflict, ConflictType, ConflictSeverity
from barbersched.models.snapshot import ScheduleSnapshot
from barbersched.models.constants import (
    DEFAULT_BASE_CAPACITY,
    HIGH_SEVERITY_CAPACITY_FACTOR,
    SEVERITY_RANK,
)
from barbersched.engine.keys import (
    format_day,
    group_by,
    is_active,
    slot_key,
    split_slot_key,
    time_of_day,
)

logger = logging.getLogger(__name__)


def detect_conflicts(
    appointments: Sequence[Appointment],
    holidays: Sequence[Holiday],
    time_off_requests: Sequence[TimeOffRequest],
    capacity_config: Optional[CapacityConfig] = None,
) -> List[ScheduleConflict]:
    """Detect scheduling conflicts in a schedule snapshot.

    Rules, in emission order:
    1. Overlapping appointments for the same barber (adjacent pairs only)
    2. Appointments on days the shop is closed for a holiday
    3. Appointments during approved time off (high severity)
    4. Appointments during pending time off (low severity advisory)
    5. Start-time slots booked beyond capacity

    All inputs must belong to the same barbershop and date range. Nothing is
    validated; a malformed record fails wherever it is parsed and the error
    propagates to the caller.

    Args:
        appointments: Appointments in the range (cancelled ones are ignored)
        holidays: Holidays in the range
        time_off_requests: Time-off requests overlapping the range
        capacity_config: Barbershop capacity (default capacity when None)

    Returns:
        Conflicts sorted by severity (high first), then by date
    """
    active = [apt for apt in appointments if is_active(apt)]

    overlap = _overlap_conflicts(active)
    holiday = _holiday_conflicts(active, holidays)
    approved = _time_off_conflicts(active, time_off_requests, TimeOffStatus.APPROVED)
    pending = _time_off_conflicts(active, time_off_requests, TimeOffStatus.PENDING)
    capacity = _capacity_conflicts(active, capacity_config)

    logger.debug(
        f"Detected conflicts over {len(active)} active appointments: "
        f"overlap={len(overlap)} holiday={len(holiday)} timeoff={len(approved)} "
        f"timeoff_pending={len(pending)} capacity={len(capacity)}"
    )

    return sort_conflicts(overlap + holiday + approved + pending + capacity)


def detect_snapshot_conflicts(snapshot: ScheduleSnapshot) -> List[ScheduleConflict]:
    """Run conflict detection over a loaded snapshot."""
    return detect_conflicts(
        snapshot.appointments,
        snapshot.holidays,
        snapshot.time_off_requests,
        snapshot.capacity_config,
    )


def sort_conflicts(conflicts: List[ScheduleConflict]) -> List[ScheduleConflict]:
    """Stable sort by severity rank, then date ascending.

    Ties keep emission order.
    """
    return sorted(conflicts, key=lambda c: (SEVERITY_RANK[c.severity], c.date))


def _overlap_conflicts(active: List[Appointment]) -> List[ScheduleConflict]:
    conflicts: List[ScheduleConflict] = []

    for barber_id, barber_apts in group_by(active, lambda apt: apt.barber_id).items():
        ordered = sorted(barber_apts, key=lambda apt: apt.start_time)

        # Only each appointment and its immediate successor are compared, so a
        # chain of three overlapping appointments yields two conflicts.
        for current, following in zip(ordered, ordered[1:]):
            if current.end_time <= following.start_time:
                continue
            conflicts.append(
                ScheduleConflict(
                    id=f"overlap-{current.id}-{following.id}",
                    type=ConflictType.OVERLAP,
                    severity=ConflictSeverity.HIGH,
                    date=current.start_time.date(),
                    time=f"{time_of_day(current.start_time)} - {time_of_day(following.end_time)}",
                    barber_id=barber_id,
                    barber_name=current.barber_name,
                    description=(
                        f"Overlapping appointments: {current.customer_name} "
                        f"and {following.customer_name}"
                    ),
                    affected_appointments=2,
                    resolution="Reschedule one of the appointments or assign it to another barber",
                )
            )

    return conflicts


def _holiday_conflicts(active: List[Appointment], holidays: Sequence[Holiday]) -> List[ScheduleConflict]:
    conflicts: List[ScheduleConflict] = []

    for holiday in holidays:
        # Holidays with special hours do not close the shop.
        if not holiday.closes_shop:
            continue
        count = sum(1 for apt in active if apt.start_time.date() == holiday.date)
        if count == 0:
            continue
        conflicts.append(
            ScheduleConflict(
                id=f"holiday-{format_day(holiday.date)}",
                type=ConflictType.HOLIDAY,
                severity=ConflictSeverity.HIGH,
                date=holiday.date,
                description=f"{count} appointments scheduled on a holiday: {holiday.reason}",
                affected_appointments=count,
                resolution="Contact the customers to reschedule their appointments",
            )
        )

    return conflicts


def _time_off_conflicts(
    active: List[Appointment],
    time_off_requests: Sequence[TimeOffRequest],
    status: TimeOffStatus,
) -> List[ScheduleConflict]:
    conflicts: List[ScheduleConflict] = []
    approved = status == TimeOffStatus.APPROVED

    for request in time_off_requests:
        if request.status != status:
            continue
        count = sum(
            1
            for apt in active
            if apt.barber_id == request.barber_id
            and request.start_date <= apt.start_time.date() <= request.end_date
        )
        if count == 0:
            continue

        if approved:
            conflict_id = f"timeoff-{request.id}"
            severity = ConflictSeverity.HIGH
            description = f"{count} appointments during approved time off"
            resolution = "Reassign the appointments to another barber or reschedule them"
        else:
            conflict_id = f"timeoff-pending-{request.id}"
            severity = ConflictSeverity.LOW
            description = f"Pending time-off request with {count} scheduled appointments"
            resolution = "Approve or reject the request before it starts"

        conflicts.append(
            ScheduleConflict(
                id=conflict_id,
                type=ConflictType.TIMEOFF,
                severity=severity,
                date=request.start_date,
                barber_id=request.barber_id,
                barber_name=request.barber_name,
                description=description,
                affected_appointments=count,
                resolution=resolution,
            )
        )

    return conflicts


def _capacity_conflicts(
    active: List[Appointment],
    capacity_config: Optional[CapacityConfig],
) -> List[ScheduleConflict]:
    conflicts: List[ScheduleConflict] = []
    if capacity_config is not None:
        capacity = capacity_config.effective_capacity
    else:
        capacity = DEFAULT_BASE_CAPACITY

    # Grouped by exact start minute, not by overlapping interval.
    for key, slot_apts in group_by(active, lambda apt: slot_key(apt.start_time)).items():
        booked = len(slot_apts)
        if booked <= capacity:
            continue
        _, time = split_slot_key(key)
        if booked > capacity * HIGH_SEVERITY_CAPACITY_FACTOR:
            severity = ConflictSeverity.HIGH
        else:
            severity = ConflictSeverity.MEDIUM
        conflicts.append(
            ScheduleConflict(
                id=f"capacity-{key}",
                type=ConflictType.CAPACITY,
                severity=severity,
                date=slot_apts[0].start_time.date(),
                time=time,
                description=f"Capacity exceeded: {booked}/{capacity} appointments",
                affected_appointments=booked - capacity,
                resolution="Raise capacity temporarily or redistribute the appointments",
            )
        )

    return conflicts
