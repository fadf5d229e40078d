"""Tests for slot reservation and the booking flow."""

import threading

import pytest
from sqlalchemy.orm import sessionmaker

from barbershop.database import init_db, make_engine
from barbershop.exceptions import (
    BookingValidationError,
    SlotConflictError,
    SlotUnavailableError,
)
from barbershop.models import Bookings
from barbershop.services.booking import create_booking, reserve
from barbershop.services.schedule_store import ScheduleStore


def slot_count(db, date_str, time_str):
    return db.query(Bookings).filter(Bookings.date == date_str, Bookings.time == time_str).count()


def booking_payload(**overrides):
    payload = {"name": "Ana", "email": "ana@example.com", "date": "2024-01-24", "time": "12:30"}
    payload.update(overrides)
    return payload


class TestReserve:
    """Conflict arbitration on (date, time)."""

    def test_accepts_free_slot(self, db):
        booking = reserve(db, "2024-01-15", "14:00", "Ana", "ana@example.com")

        assert booking.id is not None
        assert slot_count(db, "2024-01-15", "14:00") == 1

    def test_stores_canonical_time(self, db):
        booking = reserve(db, "2024-01-15", "9:00", "Ana", "ana@example.com")

        assert booking.time == "09:00"

    def test_precheck_rejects_taken_slot(self, db):
        reserve(db, "2024-01-15", "14:00", "Ana", "ana@example.com")

        with pytest.raises(SlotConflictError) as exc_info:
            reserve(db, "2024-01-15", "14:00", "Ben", "ben@example.com")

        assert exc_info.value.status_code == 409

    def test_constraint_is_authoritative_without_precheck(self, db):
        """Simulates a lost race: pre-check passed but another insert won."""
        reserve(db, "2024-01-15", "14:00", "Ana", "ana@example.com")

        with pytest.raises(SlotConflictError):
            reserve(db, "2024-01-15", "14:00", "Ben", "ben@example.com", precheck=False)

        assert slot_count(db, "2024-01-15", "14:00") == 1

    def test_session_usable_after_conflict(self, db):
        reserve(db, "2024-01-15", "14:00", "Ana", "ana@example.com")
        with pytest.raises(SlotConflictError):
            reserve(db, "2024-01-15", "14:00", "Ben", "ben@example.com", precheck=False)

        booking = reserve(db, "2024-01-15", "14:30", "Ben", "ben@example.com")

        assert booking.time == "14:30"

    @pytest.mark.parametrize("value", ["13", "12:xx", "noon"])
    def test_unparseable_time_is_never_stored(self, db, value):
        with pytest.raises(SlotUnavailableError):
            reserve(db, "2024-01-15", value, "Ana", "ana@example.com")

        assert db.query(Bookings).count() == 0

    def test_same_time_other_date_is_independent(self, db):
        reserve(db, "2024-01-15", "14:00", "Ana", "ana@example.com")
        reserve(db, "2024-01-16", "14:00", "Ben", "ben@example.com")

        assert db.query(Bookings).count() == 2

    def test_concurrent_reservations_one_winner(self, tmp_path):
        """Two simultaneous submissions, exactly one row."""
        engine = make_engine(f"sqlite:///{tmp_path / 'race.db'}")
        init_db(engine)
        Session = sessionmaker(bind=engine)

        barrier = threading.Barrier(2)
        results = []
        lock = threading.Lock()

        def attempt(name):
            session = Session()
            try:
                barrier.wait()
                reserve(session, "2024-01-15", "14:00", name, f"{name}@example.com")
                outcome = "accepted"
            except SlotConflictError:
                outcome = "conflict"
            finally:
                session.close()
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=attempt, args=(n,)) for n in ("ana", "ben")]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert sorted(results) == ["accepted", "conflict"]
        check = Session()
        try:
            assert slot_count(check, "2024-01-15", "14:00") == 1
        finally:
            check.close()
            engine.dispose()


class TestCreateBooking:
    """Full booking flow against the stored schedule."""

    @pytest.fixture(autouse=True)
    def stored_schedule(self, db, shop_schedule):
        ScheduleStore(db).replace(shop_schedule)

    def test_books_open_slot(self, db):
        booking = create_booking(db, booking_payload())

        assert (booking.date, booking.time, booking.name) == ("2024-01-24", "12:30", "Ana")

    def test_unpadded_time_is_canonicalized(self, db, shop_schedule):
        """Unpadded "9:00" against a schedule opening at 09:00."""
        ScheduleStore(db).replace({**shop_schedule, "startTime": "09:00"})

        booking = create_booking(db, booking_payload(time="9:00"))

        assert booking.time == "09:00"

    def test_missing_fields_are_listed(self, db):
        with pytest.raises(BookingValidationError) as exc_info:
            create_booking(db, {"name": "Ana", "email": "  "})

        assert exc_info.value.errors == ["email", "date", "time"]

    @pytest.mark.parametrize("value", ["24-01-2024", "2024-02-30", "tomorrow"])
    def test_bad_date_is_validation_error(self, db, value):
        with pytest.raises(BookingValidationError):
            create_booking(db, booking_payload(date=value))

    def test_vacation_day_is_rejected(self, db):
        with pytest.raises(SlotUnavailableError, match="vacation period"):
            create_booking(db, booking_payload(date="2024-01-15"))

    def test_closed_day_is_rejected(self, db):
        with pytest.raises(SlotUnavailableError, match="closed day"):
            create_booking(db, booking_payload(date="2024-01-21"))

    @pytest.mark.parametrize("value", ["14:00", "12:15", "11:30", "later", "13", "12:xx"])
    def test_time_off_grid_is_rejected(self, db, value):
        with pytest.raises(SlotUnavailableError, match="outside opening hours"):
            create_booking(db, booking_payload(time=value))

    def test_taken_slot_is_conflict(self, db):
        create_booking(db, booking_payload())

        with pytest.raises(SlotConflictError):
            create_booking(db, booking_payload(name="Ben", time="12:30"))

    def test_nothing_stored_on_rejection(self, db):
        with pytest.raises(SlotUnavailableError):
            create_booking(db, booking_payload(date="2024-01-21"))

        assert db.query(Bookings).count() == 0
