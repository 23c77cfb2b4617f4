"""
Tests for AppointmentService.

Tests cover:
1. Slots from stored availability and bookings
2. Cancelled appointments free their slot
3. Month calendar and multi-day schedule
4. Booking, cancelling and completing appointments
"""
import pytest
from datetime import date, time, timedelta
from unittest.mock import patch

from emolink.services.appointment_service import AppointmentService
from emolink.services.schedule_service import AvailabilityRule, ScheduleCalculator
from emolink.schemas import AppointmentCreate, AvailabilityCreate
from emolink.exceptions import (
    AppointmentNotFoundException, SlotUnavailableException, ValidationException,
    InvalidTimeFormatException
)
from emolink.tests.conftest import (
    DOCTOR_ID, add_rule, add_appointment, add_profile
)

TUESDAY = 2


class TestAvailableSlots:
    """Tests for get_available_slots function"""

    def test_no_rule_for_weekday(self, db_session, today):
        add_rule(db_session, TUESDAY + 1, "09:00", "12:00")

        assert AppointmentService(db_session).get_available_slots(DOCTOR_ID, today) == []

    def test_inactive_rule_ignored(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "12:00", is_active=False)

        assert AppointmentService(db_session).get_available_slots(DOCTOR_ID, today) == []

    def test_other_doctor_rule_ignored(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "12:00", doctor_id="doctor-2")

        assert AppointmentService(db_session).get_available_slots(DOCTOR_ID, today) == []

    def test_scheduled_booking_blocks_slot(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        booking = add_appointment(db_session, today, time(10))

        slots = AppointmentService(db_session).get_available_slots(DOCTOR_ID, today)

        assert [(s.time, s.available, s.booking_id) for s in slots] == [
            (time(9), True, None),
            (time(10), False, booking.id),
        ]

    def test_cancelled_booking_does_not_block(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        add_appointment(db_session, today, time(10), status="cancelled")

        slots = AppointmentService(db_session).get_available_slots(DOCTOR_ID, today)

        assert all(s.available for s in slots)

    def test_booking_on_other_date_does_not_block(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        add_appointment(db_session, today + timedelta(days=7), time(9))

        slots = AppointmentService(db_session).get_available_slots(DOCTOR_ID, today)

        assert all(s.available for s in slots)

    def test_rows_converted_to_availability_rules(self, db_session, today):
        """Stored rows reach the calculator as AvailabilityRule values"""
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        service = AppointmentService(db_session)

        with patch.object(
            ScheduleCalculator, "generate_slots", wraps=ScheduleCalculator.generate_slots
        ) as generate:
            service.get_available_slots(DOCTOR_ID, today)
            service.generate_schedule(DOCTOR_ID, days=1, today=today)

        assert generate.call_count == 2
        for call in generate.call_args_list:
            rules = list(call.args[0])
            assert rules == [AvailabilityRule(TUESDAY, time(9), time(11), True)]


class TestAvailabilityRules:
    """Tests for add_availability function"""

    def test_add_rule(self, db_session):
        service = AppointmentService(db_session)

        rule = service.add_availability(
            DOCTOR_ID, AvailabilityCreate(day_of_week=1, start_time=time(8), end_time=time(12))
        )

        assert rule.id is not None
        assert rule.is_active
        assert [r.id for r in service.get_doctor_availability(DOCTOR_ID)] == [rule.id]

    def test_inverted_rule_rejected(self, db_session):
        with pytest.raises(ValidationException):
            AppointmentService(db_session).add_availability(
                DOCTOR_ID, AvailabilityCreate(day_of_week=1, start_time=time(12), end_time=time(8))
            )


class TestCalendar:
    """Tests for get_month_calendar and generate_schedule"""

    def test_month_calendar_uses_rule_weekdays(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        add_rule(db_session, TUESDAY, "14:00", "15:00")

        grid = AppointmentService(db_session).get_month_calendar(DOCTOR_ID, 2024, 6, today)

        assert len(grid) == 42
        assert [d.date for d in grid if d.has_available_slots] == [
            date(2024, 6, 11), date(2024, 6, 18), date(2024, 6, 25)
        ]

    def test_invalid_month_rejected(self, db_session, today):
        with pytest.raises(ValidationException):
            AppointmentService(db_session).get_month_calendar(DOCTOR_ID, 2024, 13, today)

    def test_schedule_covers_requested_days(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        add_appointment(db_session, today, time(9))

        schedule = AppointmentService(db_session).generate_schedule(DOCTOR_ID, days=8, today=today)

        assert len(schedule) == 8
        assert schedule[0].date == today
        assert schedule[0].day_name == "Tuesday"
        assert [s.available for s in schedule[0].time_slots] == [False, True]
        assert all(day.time_slots == [] for day in schedule[1:7])
        assert [s.available for s in schedule[7].time_slots] == [True, True]


class TestBooking:
    """Tests for create/cancel/complete appointment"""

    def _request(self, day, slot="09:00", patient="patient-1", notes=None):
        return AppointmentCreate(
            patient_id=patient, doctor_id=DOCTOR_ID, appointment_date=day, appointment_time=slot,
            notes=notes
        )

    def test_book_free_slot(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        service = AppointmentService(db_session)

        appointment = service.create_appointment(self._request(today), today)

        assert appointment.status == "scheduled"
        assert appointment.appointment_time == time(9)
        slots = service.get_available_slots(DOCTOR_ID, today)
        assert slots[0].available is False
        assert slots[0].booking_id == appointment.id

    def test_double_booking_rejected(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        service = AppointmentService(db_session)
        service.create_appointment(self._request(today), today)

        with pytest.raises(SlotUnavailableException):
            service.create_appointment(self._request(today, patient="patient-2"), today)

    def test_slot_not_offered_rejected(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")

        with pytest.raises(SlotUnavailableException):
            AppointmentService(db_session).create_appointment(self._request(today, "11:00"), today)

    def test_past_date_rejected(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")

        with pytest.raises(ValidationException):
            AppointmentService(db_session).create_appointment(
                self._request(today - timedelta(days=7)), today
            )

    def test_bad_time_rejected(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")

        with pytest.raises(InvalidTimeFormatException):
            AppointmentService(db_session).create_appointment(self._request(today, "99:00"), today)

    def test_cancel_frees_slot(self, db_session, today):
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        service = AppointmentService(db_session)
        appointment = service.create_appointment(self._request(today), today)

        cancelled = service.cancel_appointment(appointment.id, "sick")

        assert cancelled.status == "cancelled"
        assert cancelled.cancellation_reason == "sick"
        assert all(s.available for s in service.get_available_slots(DOCTOR_ID, today))
        service.create_appointment(self._request(today, patient="patient-2"), today)

    def test_complete(self, db_session, today):
        appointment = add_appointment(db_session, today, time(9))

        completed = AppointmentService(db_session).complete_appointment(appointment.id, "went well")

        assert completed.status == "completed"
        assert completed.notes == "went well"

    def test_complete_without_notes_keeps_booking_notes(self, db_session, today):
        """Completing without notes leaves the notes written at booking"""
        add_rule(db_session, TUESDAY, "09:00", "11:00")
        service = AppointmentService(db_session)
        appointment = service.create_appointment(self._request(today, notes="first visit"), today)

        completed = service.complete_appointment(appointment.id)

        assert completed.status == "completed"
        assert completed.notes == "first visit"

    def test_missing_appointment(self, db_session):
        with pytest.raises(AppointmentNotFoundException):
            AppointmentService(db_session).cancel_appointment(999, "reason")

    def test_user_appointments_latest_first_with_names(self, db_session, today):
        add_profile(db_session, "patient-1", full_name="Maria")
        early = add_appointment(db_session, today, time(9))
        late = add_appointment(db_session, today + timedelta(days=7), time(9))
        add_appointment(db_session, today, time(10), patient_id="patient-2")

        result = AppointmentService(db_session).get_user_appointments("patient-1")

        assert [a["id"] for a in result] == [late.id, early.id]
        assert result[0]["patient_name"] == "Maria"
        assert result[0]["doctor_name"]
