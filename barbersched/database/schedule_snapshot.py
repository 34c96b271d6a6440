"""Loads everything conflict detection needs for one barbershop and range."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from barbersched.models.snapshot import ScheduleSnapshot
from barbersched.database.appointment_repository import AppointmentRepository
from barbersched.database.holiday_repository import HolidayRepository
from barbersched.database.time_off_repository import TimeOffRepository
from barbersched.database.capacity_repository import CapacityRepository

logger = logging.getLogger(__name__)


class ScheduleSnapshotLoader:
    """Runs the four schedule queries and bundles their results.

    All four queries see the same barbershop and date range. Any query error
    propagates, so a snapshot is either complete or not returned at all.
    """

    def __init__(self, db: Session):
        self.appointments = AppointmentRepository(db)
        self.holidays = HolidayRepository(db)
        self.time_off = TimeOffRepository(db)
        self.capacity = CapacityRepository(db)

    def load(
        self,
        barbershop_id: str,
        start_date: date,
        end_date: date,
        barber_id: Optional[str] = None,
    ) -> ScheduleSnapshot:
        snapshot = ScheduleSnapshot(
            barbershop_id=barbershop_id,
            start_date=start_date,
            end_date=end_date,
            barber_id=barber_id,
            appointments=self.appointments.list_in_range(barbershop_id, start_date, end_date, barber_id),
            holidays=self.holidays.list_in_range(barbershop_id, start_date, end_date),
            time_off_requests=self.time_off.list_in_range(barbershop_id, start_date, end_date, barber_id),
            capacity_config=self.capacity.get(barbershop_id),
        )
        logger.debug(
            f"Loaded snapshot for barbershop {barbershop_id} {start_date}..{end_date}: "
            f"{len(snapshot.appointments)} appointments, {len(snapshot.holidays)} holidays, "
            f"{len(snapshot.time_off_requests)} time-off requests"
        )
        return snapshot
