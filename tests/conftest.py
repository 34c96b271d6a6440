"""Pytest fixtures and configuration for barbersched tests."""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from unittest.mock import patch

from barbersched.database.database import Base, get_db
from barbersched.database import models  # noqa: F401
from barbersched.database.barbershop_repository import BarbershopRepository
from barbersched.database.appointment_repository import AppointmentRepository
from barbersched.database.holiday_repository import HolidayRepository
from barbersched.database.time_off_repository import TimeOffRepository
from barbersched.database.capacity_repository import CapacityRepository
from barbersched.models.appointment import AppointmentStatus


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.
    
    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    
    Base.metadata.create_all(bind=engine)
    
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def barbershop_repository(db_session: Session):
    return BarbershopRepository(db_session)


@pytest.fixture
def appointment_repository(db_session: Session):
    return AppointmentRepository(db_session)


@pytest.fixture
def holiday_repository(db_session: Session):
    return HolidayRepository(db_session)


@pytest.fixture
def time_off_repository(db_session: Session):
    return TimeOffRepository(db_session)


@pytest.fixture
def capacity_repository(db_session: Session):
    return CapacityRepository(db_session)


@pytest.fixture
def barbershop(barbershop_repository):
    """A persisted barbershop."""
    return barbershop_repository.create("Main Street Barbers", barbershop_id="shop-1")


@pytest.fixture
def barber(barbershop_repository, barbershop):
    """A persisted barber at the test barbershop."""
    return barbershop_repository.add_barber(barbershop.id, "Carlos Mendoza", barber_id="b1")


@pytest.fixture
def other_barber(barbershop_repository, barbershop):
    return barbershop_repository.add_barber(barbershop.id, "Ana Garcia", barber_id="b2")


@pytest.fixture
def sample_appointment_base():
    """Base appointment data for creating test appointments.
    
    Returns a dict with default attributes that can be overridden.
    """
    return {
        "id": "apt-1",
        "barbershop_id": "shop-1",
        "barber_id": "b1",
        "barber_name": "Carlos Mendoza",
        "customer_name": "Juan Perez",
        "service_name": "Haircut",
        "start_time": datetime(2024, 2, 15, 10, 0),
        "end_time": datetime(2024, 2, 15, 11, 0),
        "status": AppointmentStatus.CONFIRMED,
    }


@pytest.fixture
def sample_time_off_base():
    """Base time-off request data for creating test requests."""
    return {
        "id": "to-1",
        "barber_id": "b1",
        "barber_name": "Carlos Mendoza",
        "start_date": "2024-02-14",
        "end_date": "2024-02-16",
        "status": "approved",
        "reason": "Vacation",
    }


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from barbersched.api.app import app
    
    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    
    app.dependency_overrides[get_db] = override_get_db
    
    # Schema already exists in the test session; skip startup init_db().
    with patch("barbersched.api.app.init_db"):
        with TestClient(app) as client:
            yield client
    
    # Clean up dependency overrides
    app.dependency_overrides.clear()
