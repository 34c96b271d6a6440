"""Repository for Holiday database operations."""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from barbersched.models.holiday import Holiday, HolidayCustomHours
from barbersched.database.models import HolidayDB

logger = logging.getLogger(__name__)


class HolidayRepository:
    """Repository for barbershop holidays (one per barbershop and day)."""

    def __init__(self, db: Session):
        self.db = db

    def create_or_update(
        self,
        barbershop_id: str,
        holiday_date: date,
        reason: str,
        custom_hours: Optional[HolidayCustomHours] = None,
    ) -> Holiday:
        """Insert a holiday, or overwrite the existing one on the same day."""
        hours = custom_hours.model_dump() if custom_hours is not None else None
        try:
            row = (
                self.db.query(HolidayDB)
                .filter(HolidayDB.barbershop_id == barbershop_id, HolidayDB.date == holiday_date)
                .first()
            )
            if row is None:
                row = HolidayDB(
                    id=str(uuid.uuid4()),
                    barbershop_id=barbershop_id,
                    date=holiday_date,
                    reason=reason,
                    custom_hours=hours,
                )
                self.db.add(row)
            else:
                row.reason = reason
                row.custom_hours = hours
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Saved holiday {row.id} on {holiday_date} for barbershop {barbershop_id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save holiday on {holiday_date}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, barbershop_id: str, holiday_id: str) -> Optional[Holiday]:
        row = (
            self.db.query(HolidayDB)
            .filter(HolidayDB.barbershop_id == barbershop_id, HolidayDB.id == holiday_id)
            .first()
        )
        return row.to_pydantic() if row else None

    def list_in_range(self, barbershop_id: str, start_date: date, end_date: date) -> List[Holiday]:
        """Holidays on any day in [start_date, end_date], ordered by date."""
        rows = (
            self.db.query(HolidayDB)
            .filter(
                HolidayDB.barbershop_id == barbershop_id,
                HolidayDB.date >= start_date,
                HolidayDB.date <= end_date,
            )
            .order_by(HolidayDB.date)
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def delete(self, barbershop_id: str, holiday_id: str) -> bool:
        """Delete a holiday. Returns False if it does not exist."""
        try:
            row = (
                self.db.query(HolidayDB)
                .filter(HolidayDB.barbershop_id == barbershop_id, HolidayDB.id == holiday_id)
                .first()
            )
            if row is None:
                return False
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted holiday {holiday_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete holiday {holiday_id}: {type(e).__name__}: {str(e)}")
            raise
