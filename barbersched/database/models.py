"""SQLAlchemy database models for barbersched."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Date, DateTime, JSON, ForeignKey, UniqueConstraint

from typing import Union, TypeVar, Type
from barbersched.database.database import Base
from barbersched.models.barbershop import Barbershop, Barber
from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.models.holiday import Holiday, HolidayCustomHours
from barbersched.models.time_off import TimeOffRequest, TimeOffStatus
from barbersched.models.capacity import CapacityConfig

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).
    
    Args:
        enum_obj: Enum instance or string value
        
    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.
    
    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails
        
    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def _new_id() -> str:
    return str(uuid.uuid4())


class BarbershopDB(Base):
    """Database model for a barbershop (tenant)."""

    __tablename__ = "barbershops"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self) -> Barbershop:
        return Barbershop(id=self.id, name=self.name)


class BarberDB(Base):
    """Database model for a barber working at one barbershop."""

    __tablename__ = "barbers"

    id = Column(String, primary_key=True, default=_new_id)
    barbershop_id = Column(String, ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False, index=True)
    display_name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self) -> Barber:
        return Barber(id=self.id, barbershop_id=self.barbershop_id, display_name=self.display_name)


class AppointmentDB(Base):
    """Database model for Appointment."""
    
    __tablename__ = "appointments"
    
    id = Column(String, primary_key=True, default=_new_id)
    barbershop_id = Column(String, ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False, index=True)
    barber_id = Column(String, ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    service_name = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    status = Column(String, nullable=False, default=AppointmentStatus.PENDING.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_pydantic(self, barber_name: str = None) -> Appointment:
        """Convert database model to Pydantic model."""
        return Appointment(
            id=self.id,
            barbershop_id=self.barbershop_id,
            barber_id=self.barber_id,
            barber_name=barber_name,
            customer_name=self.customer_name,
            service_name=self.service_name,
            start_time=self.start_time,
            end_time=self.end_time,
            status=value_to_enum(self.status, AppointmentStatus, AppointmentStatus.PENDING),
        )
    
    @classmethod
    def from_pydantic(cls, appointment: Appointment) -> "AppointmentDB":
        """Create database model from Pydantic model."""
        return cls(
            id=appointment.id,
            barbershop_id=appointment.barbershop_id,
            barber_id=appointment.barber_id,
            customer_name=appointment.customer_name,
            service_name=appointment.service_name,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            status=enum_to_value(appointment.status),
        )


class HolidayDB(Base):
    """Database model for Holiday (one per barbershop and day)."""

    __tablename__ = "holidays"
    __table_args__ = (
        UniqueConstraint("barbershop_id", "date", name="uq_holiday_barbershop_date"),
    )

    id = Column(String, primary_key=True, default=_new_id)
    barbershop_id = Column(String, ForeignKey("barbershops.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    reason = Column(String, nullable=False)
    # NULL means closed all day
    custom_hours = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self) -> Holiday:
        """Convert database model to Pydantic model."""
        return Holiday(
            id=self.id,
            barbershop_id=self.barbershop_id,
            date=self.date,
            reason=self.reason,
            custom_hours=HolidayCustomHours(**self.custom_hours) if self.custom_hours else None,
        )


class TimeOffRequestDB(Base):
    """Database model for TimeOffRequest."""

    __tablename__ = "time_off_requests"

    id = Column(String, primary_key=True, default=_new_id)
    barber_id = Column(String, ForeignKey("barbers.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, default=TimeOffStatus.PENDING.value, index=True)
    reason = Column(String, nullable=False, default="")
    notes = Column(String, nullable=True)
    reviewed_by = Column(String, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    review_notes = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self, barber_name: str = None) -> TimeOffRequest:
        """Convert database model to Pydantic model."""
        return TimeOffRequest(
            id=self.id,
            barber_id=self.barber_id,
            barber_name=barber_name,
            start_date=self.start_date,
            end_date=self.end_date,
            status=value_to_enum(self.status, TimeOffStatus, TimeOffStatus.PENDING),
            reason=self.reason,
            notes=self.notes,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
            review_notes=self.review_notes,
        )


class CapacityConfigDB(Base):
    """Database model for a barbershop's capacity configuration."""

    __tablename__ = "capacity_configs"

    barbershop_id = Column(String, ForeignKey("barbershops.id", ondelete="CASCADE"), primary_key=True)
    base_capacity = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self) -> CapacityConfig:
        """Convert database model to Pydantic model."""
        return CapacityConfig(barbershop_id=self.barbershop_id, base_capacity=self.base_capacity)
