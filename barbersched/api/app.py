"""FastAPI web application for barbersched."""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import date, date as Date, datetime
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from barbersched.database.database import get_db, init_db
from barbersched.database.barbershop_repository import BarbershopRepository
from barbersched.database.appointment_repository import AppointmentRepository
from barbersched.database.holiday_repository import HolidayRepository
from barbersched.database.time_off_repository import TimeOffRepository
from barbersched.database.capacity_repository import CapacityRepository
from barbersched.database.schedule_snapshot import ScheduleSnapshotLoader
from barbersched.engine.conflicts import detect_snapshot_conflicts
from barbersched.engine.summary import summarize_conflicts
from barbersched.engine.time_off import TimeOffValidationError, TimeOffTransitionError
from barbersched.models.barbershop import Barbershop, Barber
from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.models.holiday import Holiday, HolidayCustomHours
from barbersched.models.time_off import TimeOffRequest, TimeOffStats
from barbersched.models.capacity import CapacityConfig
from barbersched.models.conflict import ScheduleConflict, ConflictSummary

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="barbersched API",
    description="Barbershop schedule data and conflict detection",
    version="0.1.0",
    lifespan=lifespan,
)


# Request models
class BarbershopCreate(BaseModel):
    name: str = Field(..., min_length=1)


class BarberCreate(BaseModel):
    display_name: str = Field(..., min_length=1)


class AppointmentCreate(BaseModel):
    barber_id: str
    customer_name: str
    service_name: str
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus = AppointmentStatus.CONFIRMED


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class HolidayUpsert(BaseModel):
    date: Date
    reason: str
    custom_hours: Optional[HolidayCustomHours] = None


class TimeOffCreate(BaseModel):
    barber_id: str
    start_date: date
    end_date: date
    reason: str = ""
    notes: Optional[str] = None


class TimeOffApprove(BaseModel):
    reviewed_by: str
    notes: Optional[str] = None


class TimeOffReject(BaseModel):
    reviewed_by: str
    reason: str


class CapacityUpdate(BaseModel):
    base_capacity: Optional[int] = Field(None, ge=0)


# Response models
class BarberListResponse(BaseModel):
    barbers: List[Barber]
    count: int


class AppointmentListResponse(BaseModel):
    appointments: List[Appointment]
    count: int


class HolidayListResponse(BaseModel):
    holidays: List[Holiday]
    count: int


class TimeOffListResponse(BaseModel):
    requests: List[TimeOffRequest]
    count: int


class ConflictReportResponse(BaseModel):
    """Conflicts for one barbershop and date range."""
    barbershop_id: str
    start_date: date
    end_date: date
    barber_id: Optional[str] = None
    conflicts: List[ScheduleConflict]
    summary: ConflictSummary


def _require_barbershop(db: Session, barbershop_id: str) -> Barbershop:
    barbershop = BarbershopRepository(db).get(barbershop_id)
    if barbershop is None:
        raise HTTPException(status_code=404, detail=f"Barbershop {barbershop_id} not found")
    return barbershop


def _require_barber(db: Session, barbershop_id: str, barber_id: str) -> Barber:
    barber = BarbershopRepository(db).get_barber(barber_id)
    if barber is None or barber.barbershop_id != barbershop_id:
        raise HTTPException(status_code=404, detail=f"Barber {barber_id} not found in barbershop {barbershop_id}")
    return barber


def _require_appointment(db: Session, barbershop_id: str, appointment_id: str) -> Appointment:
    appointment = AppointmentRepository(db).get(appointment_id)
    if appointment is None or appointment.barbershop_id != barbershop_id:
        raise HTTPException(status_code=404, detail=f"Appointment {appointment_id} not found")
    return appointment


def _require_time_off(db: Session, barbershop_id: str, request_id: str) -> TimeOffRequest:
    """A time-off request belongs to the barbershop of its barber."""
    request = TimeOffRepository(db).get(request_id)
    barber = BarbershopRepository(db).get_barber(request.barber_id) if request else None
    if barber is None or barber.barbershop_id != barbershop_id:
        raise HTTPException(status_code=404, detail=f"Time-off request {request_id} not found")
    return request


def _check_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/barbershops", response_model=Barbershop, status_code=201)
def create_barbershop(body: BarbershopCreate, db: Session = Depends(get_db)):
    return BarbershopRepository(db).create(body.name)


@app.post("/barbershops/{barbershop_id}/barbers", response_model=Barber, status_code=201)
def add_barber(barbershop_id: str, body: BarberCreate, db: Session = Depends(get_db)):
    _require_barbershop(db, barbershop_id)
    return BarbershopRepository(db).add_barber(barbershop_id, body.display_name)


@app.get("/barbershops/{barbershop_id}/barbers", response_model=BarberListResponse)
def list_barbers(barbershop_id: str, db: Session = Depends(get_db)):
    _require_barbershop(db, barbershop_id)
    barbers = BarbershopRepository(db).list_barbers(barbershop_id)
    return BarberListResponse(barbers=barbers, count=len(barbers))


@app.post("/barbershops/{barbershop_id}/appointments", response_model=Appointment, status_code=201)
def create_appointment(barbershop_id: str, body: AppointmentCreate, db: Session = Depends(get_db)):
    """Book an appointment. Overlaps are allowed here and reported as conflicts."""
    _require_barbershop(db, barbershop_id)
    _require_barber(db, barbershop_id, body.barber_id)
    if body.end_time <= body.start_time:
        raise HTTPException(status_code=400, detail="end_time must be after start_time")

    appointment = Appointment(
        id=str(uuid.uuid4()),
        barbershop_id=barbershop_id,
        barber_id=body.barber_id,
        customer_name=body.customer_name,
        service_name=body.service_name,
        start_time=body.start_time,
        end_time=body.end_time,
        status=body.status,
    )
    return AppointmentRepository(db).create(appointment)


@app.get("/barbershops/{barbershop_id}/appointments", response_model=AppointmentListResponse)
def list_appointments(
    barbershop_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    barber_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    _require_barbershop(db, barbershop_id)
    _check_range(start_date, end_date)
    appointments = AppointmentRepository(db).list_in_range(barbershop_id, start_date, end_date, barber_id)
    return AppointmentListResponse(appointments=appointments, count=len(appointments))


@app.patch("/barbershops/{barbershop_id}/appointments/{appointment_id}/status", response_model=Appointment)
def update_appointment_status(
    barbershop_id: str,
    appointment_id: str,
    body: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
):
    _require_appointment(db, barbershop_id, appointment_id)
    return AppointmentRepository(db).update_status(appointment_id, body.status)


@app.put("/barbershops/{barbershop_id}/holidays", response_model=Holiday)
def upsert_holiday(barbershop_id: str, body: HolidayUpsert, db: Session = Depends(get_db)):
    """Create or replace the holiday on a given day."""
    _require_barbershop(db, barbershop_id)
    return HolidayRepository(db).create_or_update(barbershop_id, body.date, body.reason, body.custom_hours)


@app.get("/barbershops/{barbershop_id}/holidays", response_model=HolidayListResponse)
def list_holidays(
    barbershop_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    _require_barbershop(db, barbershop_id)
    _check_range(start_date, end_date)
    holidays = HolidayRepository(db).list_in_range(barbershop_id, start_date, end_date)
    return HolidayListResponse(holidays=holidays, count=len(holidays))


@app.delete("/barbershops/{barbershop_id}/holidays/{holiday_id}", status_code=204)
def delete_holiday(barbershop_id: str, holiday_id: str, db: Session = Depends(get_db)):
    if not HolidayRepository(db).delete(barbershop_id, holiday_id):
        raise HTTPException(status_code=404, detail=f"Holiday {holiday_id} not found")


@app.get("/barbershops/{barbershop_id}/holidays/{holiday_id}/appointments", response_model=AppointmentListResponse)
def list_holiday_appointments(barbershop_id: str, holiday_id: str, db: Session = Depends(get_db)):
    """Pending and confirmed bookings on the holiday's date, to contact for rescheduling."""
    holiday = HolidayRepository(db).get(barbershop_id, holiday_id)
    if holiday is None:
        raise HTTPException(status_code=404, detail=f"Holiday {holiday_id} not found")
    appointments = AppointmentRepository(db).list_affected_on(barbershop_id, holiday.date)
    return AppointmentListResponse(appointments=appointments, count=len(appointments))


@app.post("/barbershops/{barbershop_id}/time-off", response_model=TimeOffRequest, status_code=201)
def request_time_off(barbershop_id: str, body: TimeOffCreate, db: Session = Depends(get_db)):
    _require_barbershop(db, barbershop_id)
    _require_barber(db, barbershop_id, body.barber_id)
    try:
        return TimeOffRepository(db).create(
            body.barber_id, body.start_date, body.end_date, body.reason, notes=body.notes
        )
    except TimeOffValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/barbershops/{barbershop_id}/time-off", response_model=TimeOffListResponse)
def list_time_off(
    barbershop_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    barber_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Pending and approved requests overlapping the range."""
    _require_barbershop(db, barbershop_id)
    _check_range(start_date, end_date)
    requests = TimeOffRepository(db).list_in_range(barbershop_id, start_date, end_date, barber_id)
    return TimeOffListResponse(requests=requests, count=len(requests))


@app.post("/barbershops/{barbershop_id}/time-off/{request_id}/approve", response_model=TimeOffRequest)
def approve_time_off(barbershop_id: str, request_id: str, body: TimeOffApprove, db: Session = Depends(get_db)):
    _require_time_off(db, barbershop_id, request_id)
    try:
        return TimeOffRepository(db).approve(request_id, body.reviewed_by, body.notes)
    except (TimeOffValidationError, TimeOffTransitionError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/barbershops/{barbershop_id}/time-off/{request_id}/reject", response_model=TimeOffRequest)
def reject_time_off(barbershop_id: str, request_id: str, body: TimeOffReject, db: Session = Depends(get_db)):
    _require_time_off(db, barbershop_id, request_id)
    try:
        return TimeOffRepository(db).reject(request_id, body.reviewed_by, body.reason)
    except TimeOffTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/barbershops/{barbershop_id}/time-off/{request_id}/cancel", response_model=TimeOffRequest)
def cancel_time_off(barbershop_id: str, request_id: str, db: Session = Depends(get_db)):
    _require_time_off(db, barbershop_id, request_id)
    try:
        return TimeOffRepository(db).cancel(request_id)
    except TimeOffTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/barbershops/{barbershop_id}/barbers/{barber_id}/time-off/stats", response_model=TimeOffStats)
def time_off_stats(
    barbershop_id: str,
    barber_id: str,
    year: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Yearly request counts and days for one barber (current year by default)."""
    _require_barbershop(db, barbershop_id)
    _require_barber(db, barbershop_id, barber_id)
    return TimeOffRepository(db).stats(barber_id, year or date.today().year)


@app.get("/barbershops/{barbershop_id}/capacity", response_model=CapacityConfig)
def get_capacity(barbershop_id: str, db: Session = Depends(get_db)):
    _require_barbershop(db, barbershop_id)
    return CapacityRepository(db).get(barbershop_id)


@app.put("/barbershops/{barbershop_id}/capacity", response_model=CapacityConfig)
def update_capacity(barbershop_id: str, body: CapacityUpdate, db: Session = Depends(get_db)):
    _require_barbershop(db, barbershop_id)
    return CapacityRepository(db).upsert(barbershop_id, body.base_capacity)


@app.get("/barbershops/{barbershop_id}/conflicts", response_model=ConflictReportResponse)
def get_conflicts(
    barbershop_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    barber_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Detect schedule conflicts for a barbershop over an inclusive date range."""
    _require_barbershop(db, barbershop_id)
    _check_range(start_date, end_date)

    try:
        snapshot = ScheduleSnapshotLoader(db).load(barbershop_id, start_date, end_date, barber_id)
        conflicts = detect_snapshot_conflicts(snapshot)
    except Exception as e:
        logger.error(
            f"Conflict detection failed for barbershop {barbershop_id}: {type(e).__name__}: {str(e)}"
        )
        raise HTTPException(status_code=500, detail=f"Failed to detect conflicts: {str(e)}")

    return ConflictReportResponse(
        barbershop_id=barbershop_id,
        start_date=start_date,
        end_date=end_date,
        barber_id=barber_id,
        conflicts=conflicts,
        summary=summarize_conflicts(conflicts),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
