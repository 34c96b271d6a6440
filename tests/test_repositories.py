"""Tests for the schedule data repositories and snapshot loading."""

import pytest
from datetime import date, datetime

from barbersched.database.schedule_snapshot import ScheduleSnapshotLoader
from barbersched.database.appointment_repository import day_bounds
from barbersched.engine.conflicts import detect_snapshot_conflicts
from barbersched.engine.time_off import TimeOffValidationError, TimeOffTransitionError
from barbersched.models.appointment import Appointment, AppointmentStatus
from barbersched.models.holiday import HolidayCustomHours
from barbersched.models.time_off import TimeOffStatus

TODAY = date(2024, 2, 1)


def _apt(base, apt_id, start, end, barber_id="b1", **extra):
    return Appointment(**{**base, "id": apt_id, "barber_id": barber_id, "start_time": start, "end_time": end, **extra})


class TestBarbershopRepository:
    def test_create_and_get(self, barbershop_repository, barbershop):
        assert barbershop_repository.get(barbershop.id).name == "Main Street Barbers"

    def test_get_nonexistent(self, barbershop_repository):
        assert barbershop_repository.get("missing") is None

    def test_generated_id(self, barbershop_repository):
        created = barbershop_repository.create("Second Shop")
        assert created.id
        assert barbershop_repository.get(created.id) is not None

    def test_barbers_are_scoped_to_barbershop(self, barbershop_repository, barber, other_barber):
        other_shop = barbershop_repository.create("Other", barbershop_id="shop-2")
        barbershop_repository.add_barber(other_shop.id, "Someone Else", barber_id="x1")

        barbers = barbershop_repository.list_barbers("shop-1")

        assert [b.id for b in barbers] == ["b2", "b1"]  # ordered by display name
        assert barbershop_repository.get_barber("x1").barbershop_id == "shop-2"


class TestAppointmentRepository:
    def test_day_bounds_cover_whole_end_day(self):
        start, end = day_bounds(date(2024, 2, 15), date(2024, 2, 16))

        assert start == datetime(2024, 2, 15, 0, 0)
        assert end == datetime(2024, 2, 17, 0, 0)

    def test_create_includes_barber_name(self, appointment_repository, barber, sample_appointment_base):
        created = appointment_repository.create(Appointment(**{**sample_appointment_base, "barber_name": None}))

        assert created.id == "apt-1"
        assert created.barber_name == "Carlos Mendoza"
        assert created.status == AppointmentStatus.CONFIRMED

    def test_list_in_range_is_inclusive_and_ordered(self, appointment_repository, barber, sample_appointment_base):
        base = sample_appointment_base
        appointment_repository.create(_apt(base, "late", datetime(2024, 2, 16, 23, 30), datetime(2024, 2, 16, 23, 59)))
        appointment_repository.create(_apt(base, "early", datetime(2024, 2, 15, 0, 0), datetime(2024, 2, 15, 0, 30)))
        appointment_repository.create(_apt(base, "outside", datetime(2024, 2, 17, 0, 0), datetime(2024, 2, 17, 0, 30)))

        appointments = appointment_repository.list_in_range("shop-1", date(2024, 2, 15), date(2024, 2, 16))

        assert [a.id for a in appointments] == ["early", "late"]

    def test_list_in_range_filters_by_barber(self, appointment_repository, barber, other_barber, sample_appointment_base):
        base = sample_appointment_base
        appointment_repository.create(_apt(base, "a1", datetime(2024, 2, 15, 10, 0), datetime(2024, 2, 15, 11, 0), barber_id="b1"))
        appointment_repository.create(_apt(base, "a2", datetime(2024, 2, 15, 10, 0), datetime(2024, 2, 15, 11, 0), barber_id="b2"))

        appointments = appointment_repository.list_in_range("shop-1", date(2024, 2, 15), date(2024, 2, 15), barber_id="b2")

        assert [a.id for a in appointments] == ["a2"]
        assert appointments[0].barber_name == "Ana Garcia"

    def test_update_status(self, appointment_repository, barber, sample_appointment_base):
        appointment_repository.create(Appointment(**sample_appointment_base))

        updated = appointment_repository.update_status("apt-1", AppointmentStatus.CANCELLED)

        assert updated.status == AppointmentStatus.CANCELLED

    def test_list_affected_on_keeps_pending_and_confirmed(
        self, appointment_repository, barber, sample_appointment_base,
    ):
        base = sample_appointment_base
        day = date(2024, 2, 12)
        for apt_id, status in [
            ("confirmed", AppointmentStatus.CONFIRMED),
            ("pending", AppointmentStatus.PENDING),
            ("cancelled", AppointmentStatus.CANCELLED),
            ("completed", AppointmentStatus.COMPLETED),
        ]:
            appointment_repository.create(
                _apt(base, apt_id, datetime(2024, 2, 12, 10, 0), datetime(2024, 2, 12, 11, 0), status=status)
            )
        appointment_repository.create(
            _apt(base, "other-day", datetime(2024, 2, 13, 9, 0), datetime(2024, 2, 13, 10, 0))
        )

        affected = appointment_repository.list_affected_on("shop-1", day)

        assert [a.id for a in affected] == ["confirmed", "pending"]
        assert appointment_repository.list_affected_on("shop-2", day) == []

    def test_update_status_nonexistent(self, appointment_repository):
        assert appointment_repository.update_status("missing", AppointmentStatus.CANCELLED) is None


class TestHolidayRepository:
    def test_create_or_update_replaces_same_day(self, holiday_repository, barbershop):
        first = holiday_repository.create_or_update("shop-1", date(2024, 2, 12), "Carnival")
        second = holiday_repository.create_or_update(
            "shop-1", date(2024, 2, 12), "Carnival (short day)", HolidayCustomHours(start="10:00", end="14:00")
        )

        assert second.id == first.id
        holidays = holiday_repository.list_in_range("shop-1", date(2024, 2, 1), date(2024, 2, 29))
        assert len(holidays) == 1
        assert holidays[0].reason == "Carnival (short day)"
        assert holidays[0].custom_hours.start == "10:00"
        assert holidays[0].closes_shop is False

    def test_list_in_range(self, holiday_repository, barbershop):
        holiday_repository.create_or_update("shop-1", date(2024, 2, 13), "Carnival")
        holiday_repository.create_or_update("shop-1", date(2024, 2, 12), "Carnival")
        holiday_repository.create_or_update("shop-1", date(2024, 3, 24), "Memorial Day")

        holidays = holiday_repository.list_in_range("shop-1", date(2024, 2, 12), date(2024, 2, 13))

        assert [h.date for h in holidays] == [date(2024, 2, 12), date(2024, 2, 13)]
        assert all(h.closes_shop for h in holidays)

    def test_delete(self, holiday_repository, barbershop):
        holiday = holiday_repository.create_or_update("shop-1", date(2024, 2, 12), "Carnival")

        assert holiday_repository.delete("shop-1", holiday.id) is True
        assert holiday_repository.get("shop-1", holiday.id) is None
        assert holiday_repository.delete("shop-1", holiday.id) is False


class TestTimeOffRepository:
    def test_create_is_pending(self, time_off_repository, barber):
        request = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)

        assert request.status == TimeOffStatus.PENDING
        assert request.barber_name == "Carlos Mendoza"

    def test_create_rejects_invalid_dates(self, time_off_repository, barber):
        with pytest.raises(TimeOffValidationError):
            time_off_repository.create("b1", date(2024, 2, 16), date(2024, 2, 14), "Vacation", today=TODAY)

    def test_create_rejects_overlap_with_approved(self, time_off_repository, barber):
        first = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)
        time_off_repository.approve(first.id, reviewed_by="owner")

        with pytest.raises(TimeOffValidationError):
            time_off_repository.create("b1", date(2024, 2, 16), date(2024, 2, 18), "More vacation", today=TODAY)

    def test_approve_records_reviewer(self, time_off_repository, barber):
        request = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)

        approved = time_off_repository.approve(request.id, reviewed_by="owner", notes="Enjoy")

        assert approved.status == TimeOffStatus.APPROVED
        assert approved.reviewed_by == "owner"
        assert approved.review_notes == "Enjoy"
        assert approved.reviewed_at is not None

    def test_approve_twice_fails(self, time_off_repository, barber):
        request = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)
        time_off_repository.approve(request.id, reviewed_by="owner")

        with pytest.raises(TimeOffTransitionError):
            time_off_repository.approve(request.id, reviewed_by="owner")

    def test_approve_rejects_overlap_with_other_approved(self, time_off_repository, barber):
        first = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)
        second = time_off_repository.create("b1", date(2024, 2, 15), date(2024, 2, 18), "Trip", today=TODAY)
        time_off_repository.approve(first.id, reviewed_by="owner")

        with pytest.raises(TimeOffValidationError):
            time_off_repository.approve(second.id, reviewed_by="owner")

    def test_reject(self, time_off_repository, barber):
        request = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)

        rejected = time_off_repository.reject(request.id, reviewed_by="owner", reason="Busy week")

        assert rejected.status == TimeOffStatus.REJECTED
        assert rejected.review_notes == "Busy week"

    def test_cancel_started_approved_fails(self, time_off_repository, barber):
        request = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)
        time_off_repository.approve(request.id, reviewed_by="owner")

        with pytest.raises(TimeOffTransitionError):
            time_off_repository.cancel(request.id, today=date(2024, 2, 15))
        assert time_off_repository.cancel(request.id, today=TODAY).status == TimeOffStatus.CANCELLED

    def test_stats_for_year(self, time_off_repository, barber, other_barber):
        approved = time_off_repository.create("b1", date(2024, 2, 14), date(2024, 2, 16), "Vacation", today=TODAY)
        time_off_repository.approve(approved.id, reviewed_by="owner")
        time_off_repository.create("b1", date(2024, 4, 1), date(2024, 4, 1), "Errand", today=TODAY)
        time_off_repository.create("b1", date(2024, 12, 31), date(2025, 1, 1), "New year", today=TODAY)
        time_off_repository.create("b2", date(2024, 3, 1), date(2024, 3, 5), "Trip", today=TODAY)

        stats = time_off_repository.stats("b1", 2024)

        assert stats.total_requests == 2
        assert stats.approved_requests == 1
        assert stats.pending_requests == 1
        assert stats.days_requested == 4
        assert stats.days_approved == 3
        assert time_off_repository.stats("b1", 2023).total_requests == 0

    def test_unknown_request(self, time_off_repository):
        assert time_off_repository.approve("missing", reviewed_by="owner") is None
        assert time_off_repository.reject("missing", reviewed_by="owner", reason="-") is None
        assert time_off_repository.cancel("missing", today=TODAY) is None

    def test_list_in_range_returns_active_overlapping_requests(self, time_off_repository, barber, other_barber):
        inside = time_off_repository.create("b1", date(2024, 2, 10), date(2024, 2, 14), "Vacation", today=TODAY)
        other = time_off_repository.create("b2", date(2024, 2, 16), date(2024, 2, 20), "Trip", today=TODAY)
        rejected = time_off_repository.create("b1", date(2024, 2, 15), date(2024, 2, 15), "Errand", today=TODAY)
        time_off_repository.reject(rejected.id, reviewed_by="owner", reason="No")
        time_off_repository.create("b1", date(2024, 3, 1), date(2024, 3, 2), "Later", today=TODAY)

        requests = time_off_repository.list_in_range("shop-1", date(2024, 2, 14), date(2024, 2, 16))

        assert [r.id for r in requests] == [inside.id, other.id]
        only_b2 = time_off_repository.list_in_range("shop-1", date(2024, 2, 14), date(2024, 2, 16), barber_id="b2")
        assert [r.id for r in only_b2] == [other.id]


class TestCapacityRepository:
    def test_default_when_unset(self, capacity_repository, barbershop):
        config = capacity_repository.get("shop-1")

        assert config.base_capacity is None
        assert config.effective_capacity == 4

    def test_upsert(self, capacity_repository, barbershop):
        capacity_repository.upsert("shop-1", 6)
        capacity_repository.upsert("shop-1", 2)

        assert capacity_repository.get("shop-1").effective_capacity == 2


class TestScheduleSnapshotLoader:
    def test_loads_all_sources_and_detects(
        self, db_session, appointment_repository, holiday_repository, time_off_repository,
        capacity_repository, barber, other_barber, sample_appointment_base,
    ):
        base = sample_appointment_base
        appointment_repository.create(_apt(base, "a1", datetime(2024, 2, 15, 10, 0), datetime(2024, 2, 15, 11, 0)))
        appointment_repository.create(_apt(base, "a2", datetime(2024, 2, 15, 10, 30), datetime(2024, 2, 15, 11, 30)))
        appointment_repository.create(
            _apt(base, "a3", datetime(2024, 2, 16, 9, 0), datetime(2024, 2, 16, 9, 30), barber_id="b2")
        )
        holiday_repository.create_or_update("shop-1", date(2024, 2, 16), "Carnival")
        time_off_repository.create("b2", date(2024, 2, 16), date(2024, 2, 16), "Errand", today=TODAY)
        capacity_repository.upsert("shop-1", 4)

        snapshot = ScheduleSnapshotLoader(db_session).load("shop-1", date(2024, 2, 15), date(2024, 2, 16))

        assert len(snapshot.appointments) == 3
        assert len(snapshot.holidays) == 1
        assert len(snapshot.time_off_requests) == 1
        assert snapshot.capacity_config.base_capacity == 4

        conflicts = detect_snapshot_conflicts(snapshot)
        assert [(c.type, c.severity) for c in conflicts] == [
            ("overlap", "high"),
            ("holiday", "high"),
            ("timeoff", "low"),
        ]
        assert conflicts[0].barber_name == "Carlos Mendoza"
        assert conflicts[2].barber_name == "Ana Garcia"

    def test_cancelled_appointment_in_database_is_ignored(
        self, db_session, appointment_repository, barber, sample_appointment_base,
    ):
        base = sample_appointment_base
        appointment_repository.create(_apt(base, "a1", datetime(2024, 2, 15, 10, 0), datetime(2024, 2, 15, 11, 0)))
        appointment_repository.create(_apt(base, "a2", datetime(2024, 2, 15, 10, 30), datetime(2024, 2, 15, 11, 30)))
        appointment_repository.update_status("a2", AppointmentStatus.CANCELLED)

        snapshot = ScheduleSnapshotLoader(db_session).load("shop-1", date(2024, 2, 15), date(2024, 2, 15))

        assert len(snapshot.appointments) == 2
        assert detect_snapshot_conflicts(snapshot) == []
