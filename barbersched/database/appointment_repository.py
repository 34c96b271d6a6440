"""Repository for Appointment database operations."""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.database.models import AppointmentDB, BarberDB, enum_to_value

logger = logging.getLogger(__name__)

AFFECTED_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value)


def day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """[start of start_date, start of the day after end_date) for an inclusive day range."""
    return (
        datetime.combine(start_date, time.min),
        datetime.combine(end_date + timedelta(days=1), time.min),
    )


class AppointmentRepository:
    """Repository for Appointment database operations."""
    
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(AppointmentDB, BarberDB.display_name).join(
            BarberDB, BarberDB.id == AppointmentDB.barber_id
        )
    
    def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment."""
        try:
            row = AppointmentDB.from_pydantic(appointment)
            self.db.add(row)
            self.db.commit()
            logger.debug(f"Created appointment {appointment.id} for barber {appointment.barber_id}")
            return self.get(appointment.id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create appointment {appointment.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def get(self, appointment_id: str) -> Optional[Appointment]:
        """Get appointment by ID."""
        result = self._query().filter(AppointmentDB.id == appointment_id).first()
        if result is None:
            return None
        row, barber_name = result
        return row.to_pydantic(barber_name)
    
    def list_in_range(
        self,
        barbershop_id: str,
        start_date: date,
        end_date: date,
        barber_id: Optional[str] = None,
    ) -> List[Appointment]:
        """Appointments starting on any day in [start_date, end_date], ordered by start time.

        Cancelled appointments are included; callers decide what to ignore.
        """
        range_start, range_end = day_bounds(start_date, end_date)
        query = self._query().filter(
            AppointmentDB.barbershop_id == barbershop_id,
            AppointmentDB.start_time >= range_start,
            AppointmentDB.start_time < range_end,
        )
        if barber_id:
            query = query.filter(AppointmentDB.barber_id == barber_id)
        results = query.order_by(AppointmentDB.start_time, AppointmentDB.id).all()
        return [row.to_pydantic(barber_name) for row, barber_name in results]
    
    def list_affected_on(self, barbershop_id: str, day: date) -> List[Appointment]:
        """Pending and confirmed appointments starting on `day`.

        These are the bookings to contact when the shop closes that day.
        """
        range_start, range_end = day_bounds(day, day)
        results = (
            self._query()
            .filter(
                AppointmentDB.barbershop_id == barbershop_id,
                AppointmentDB.start_time >= range_start,
                AppointmentDB.start_time < range_end,
                AppointmentDB.status.in_(AFFECTED_STATUSES),
            )
            .order_by(AppointmentDB.start_time, AppointmentDB.id)
            .all()
        )
        return [row.to_pydantic(barber_name) for row, barber_name in results]

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> Optional[Appointment]:
        """Change an appointment's status. Returns None if it does not exist."""
        try:
            row = self.db.query(AppointmentDB).filter(AppointmentDB.id == appointment_id).first()
            if row is None:
                return None
            row.status = enum_to_value(status)
            self.db.commit()
            logger.debug(f"Appointment {appointment_id} status -> {row.status}")
            return self.get(appointment_id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update appointment {appointment_id}: {type(e).__name__}: {str(e)}")
            raise
