"""Repository for TimeOffRequest database operations.

Status changes go through the rules in `barbersched.engine.time_off`; a
violated rule raises before anything is written.
"""

import logging
import uuid
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from barbersched.models.time_off import TimeOffRequest, TimeOffStatus, TimeOffStats
from barbersched.database.models import TimeOffRequestDB, BarberDB
from barbersched.engine.time_off import (
    TimeOffValidationError,
    check_can_cancel,
    check_can_review,
    find_overlapping_approved,
    summarize_time_off,
    validate_time_off_dates,
    year_bounds,
)

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (TimeOffStatus.PENDING.value, TimeOffStatus.APPROVED.value)


class TimeOffRepository:
    """Repository for barber time-off requests."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(TimeOffRequestDB, BarberDB.display_name).join(
            BarberDB, BarberDB.id == TimeOffRequestDB.barber_id
        )

    def _row(self, request_id: str) -> Optional[TimeOffRequestDB]:
        return self.db.query(TimeOffRequestDB).filter(TimeOffRequestDB.id == request_id).first()

    def _approved_for_barber(self, barber_id: str) -> List[TimeOffRequest]:
        rows = (
            self.db.query(TimeOffRequestDB)
            .filter(
                TimeOffRequestDB.barber_id == barber_id,
                TimeOffRequestDB.status == TimeOffStatus.APPROVED.value,
            )
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def _ensure_no_approved_overlap(self, request: TimeOffRequest, exclude_id: Optional[str] = None) -> None:
        overlapping = find_overlapping_approved(
            request.barber_id,
            request.start_date,
            request.end_date,
            self._approved_for_barber(request.barber_id),
            exclude_id=exclude_id,
        )
        if overlapping:
            raise TimeOffValidationError("An approved time-off request already covers these dates")

    def create(
        self,
        barber_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        notes: Optional[str] = None,
        today: Optional[date] = None,
    ) -> TimeOffRequest:
        """Submit a new pending request."""
        validate_time_off_dates(start_date, end_date, today or date.today())
        request = TimeOffRequest(
            id=str(uuid.uuid4()),
            barber_id=barber_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            notes=notes,
        )
        self._ensure_no_approved_overlap(request)

        row = TimeOffRequestDB(
            id=request.id,
            barber_id=barber_id,
            start_date=start_date,
            end_date=end_date,
            status=TimeOffStatus.PENDING.value,
            reason=reason,
            notes=notes,
        )
        try:
            self.db.add(row)
            self.db.commit()
            logger.debug(f"Created time-off request {row.id} for barber {barber_id}")
            return self.get(row.id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create time-off request for barber {barber_id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, request_id: str) -> Optional[TimeOffRequest]:
        result = self._query().filter(TimeOffRequestDB.id == request_id).first()
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
    ) -> List[TimeOffRequest]:
        """Pending and approved requests sharing at least one day with the range."""
        query = self._query().filter(
            BarberDB.barbershop_id == barbershop_id,
            TimeOffRequestDB.status.in_(ACTIVE_STATUSES),
            TimeOffRequestDB.start_date <= end_date,
            TimeOffRequestDB.end_date >= start_date,
        )
        if barber_id:
            query = query.filter(TimeOffRequestDB.barber_id == barber_id)
        results = query.order_by(TimeOffRequestDB.start_date, TimeOffRequestDB.id).all()
        return [row.to_pydantic(barber_name) for row, barber_name in results]

    def stats(self, barber_id: str, year: int) -> TimeOffStats:
        """Request counts and day totals for requests inside one calendar year."""
        first_day, last_day = year_bounds(year)
        rows = (
            self.db.query(TimeOffRequestDB)
            .filter(
                TimeOffRequestDB.barber_id == barber_id,
                TimeOffRequestDB.start_date >= first_day,
                TimeOffRequestDB.end_date <= last_day,
            )
            .all()
        )
        return summarize_time_off(barber_id, year, [row.to_pydantic() for row in rows])

    def approve(self, request_id: str, reviewed_by: str, notes: Optional[str] = None) -> Optional[TimeOffRequest]:
        request = self.get(request_id)
        if request is None:
            return None
        check_can_review(request)
        self._ensure_no_approved_overlap(request, exclude_id=request_id)
        return self._set_status(request_id, TimeOffStatus.APPROVED, reviewed_by=reviewed_by, review_notes=notes)

    def reject(self, request_id: str, reviewed_by: str, reason: str) -> Optional[TimeOffRequest]:
        request = self.get(request_id)
        if request is None:
            return None
        check_can_review(request)
        return self._set_status(request_id, TimeOffStatus.REJECTED, reviewed_by=reviewed_by, review_notes=reason)

    def cancel(self, request_id: str, today: Optional[date] = None) -> Optional[TimeOffRequest]:
        request = self.get(request_id)
        if request is None:
            return None
        check_can_cancel(request, today or date.today())
        return self._set_status(request_id, TimeOffStatus.CANCELLED)

    def _set_status(
        self,
        request_id: str,
        status: TimeOffStatus,
        reviewed_by: Optional[str] = None,
        review_notes: Optional[str] = None,
    ) -> TimeOffRequest:
        try:
            row = self._row(request_id)
            row.status = status.value
            if reviewed_by is not None:
                row.reviewed_by = reviewed_by
                row.reviewed_at = datetime.utcnow()
                row.review_notes = review_notes
            self.db.commit()
            logger.debug(f"Time-off request {request_id} status -> {status.value}")
            return self.get(request_id)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update time-off request {request_id}: {type(e).__name__}: {str(e)}")
            raise
