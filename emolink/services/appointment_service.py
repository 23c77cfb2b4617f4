"""
Appointment service.
Loads availability and bookings from the database and runs the slot and
calendar calculations over them.
"""
import logging
from collections import defaultdict
from datetime import datetime, date, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session

from emolink.models import Appointment, DoctorAvailability
from emolink.schemas import AppointmentCreate, AvailabilityCreate
from emolink.repositories.appointment_repository import (
    AppointmentRepository, AvailabilityRepository
)
from emolink.repositories.profile_repository import ProfileRepository
from emolink.services.date_service import DateService
from emolink.services.schedule_service import (
    AvailabilityRule, ScheduleCalculator, TimeSlot, CalendarDay, DaySchedule
)
from emolink.exceptions import (
    AppointmentNotFoundException, SlotUnavailableException, ValidationException
)
from emolink.constants import (
    APPOINTMENT_STATUS_CANCELLED,
    APPOINTMENT_STATUS_COMPLETED,
    APPOINTMENT_STATUS_SCHEDULED,
    DEFAULT_DOCTOR_NAME,
    SCHEDULE_LOOKAHEAD_DAYS,
    WEEKDAY_NAMES,
)

logger = logging.getLogger("emolink.appointments")


def _to_rule(row: DoctorAvailability) -> AvailabilityRule:
    """Detach an availability row into the calculator's rule type"""
    return AvailabilityRule(
        day_of_week=row.day_of_week,
        start_time=row.start_time,
        end_time=row.end_time,
        is_active=bool(row.is_active)
    )


class AppointmentService:
    """Service for appointment scheduling"""

    def __init__(self, db: Session):
        self.db = db
        self.appointment_repo = AppointmentRepository()
        self.availability_repo = AvailabilityRepository()
        self.profile_repo = ProfileRepository()
        self.date_service = DateService()

    def _today(self) -> date:
        return self.date_service.get_local_today(self.date_service.get_local_timezone())

    def _now(self) -> datetime:
        return self.date_service.local_now(self.date_service.get_local_timezone())

    def get_user_appointments(self, user_id: str) -> List[dict]:
        """Get a patient's appointments with display names attached"""
        appointments = self.appointment_repo.get_for_patient(self.db, user_id)
        profile = self.profile_repo.get_by_user_id(self.db, user_id)
        patient_name = profile.full_name if profile else None

        return [
            {
                "id": a.id,
                "patient_id": a.patient_id,
                "doctor_id": a.doctor_id,
                "appointment_date": a.appointment_date,
                "appointment_time": a.appointment_time,
                "status": a.status,
                "cancellation_reason": a.cancellation_reason,
                "notes": a.notes,
                "created_at": a.created_at,
                "updated_at": a.updated_at,
                "patient_name": patient_name,
                "doctor_name": DEFAULT_DOCTOR_NAME,
            }
            for a in appointments
        ]

    def get_doctor_availability(self, doctor_id: str) -> List[DoctorAvailability]:
        return self.availability_repo.get_active(self.db, doctor_id)

    def add_availability(self, doctor_id: str, rule_data: AvailabilityCreate) -> DoctorAvailability:
        """Add a weekly availability window, rejecting inverted ranges"""
        if rule_data.start_time >= rule_data.end_time:
            raise ValidationException("end_time", "end_time must be after start_time")

        rule = DoctorAvailability(doctor_id=doctor_id, **rule_data.model_dump())
        rule = self.availability_repo.create(self.db, rule)
        logger.info(
            f"Availability added for {doctor_id}: day {rule.day_of_week} "
            f"{self.date_service.format_time(rule.start_time)}-{self.date_service.format_time(rule.end_time)}"
        )
        return rule

    def get_available_slots(self, doctor_id: str, target_date: date) -> List[TimeSlot]:
        """
        Generate hourly slots for a doctor on a date.

        Only appointments with status "scheduled" occupy a slot.

        Returns:
            Slots with availability flags, empty if the doctor has no rule that weekday
        """
        day_of_week = self.date_service.sunday_weekday(target_date)
        rows = self.availability_repo.get_active_for_day(self.db, doctor_id, day_of_week)
        rules = [_to_rule(row) for row in rows]

        if not rules:
            logger.debug(f"No availability for {doctor_id} on {target_date} (day {day_of_week})")
            return []

        appointments = self.appointment_repo.get_scheduled_for_date(self.db, doctor_id, target_date)
        booked = {a.appointment_time: a.id for a in appointments}

        return ScheduleCalculator.generate_slots(rules, booked, target_date)

    def get_month_calendar(
        self,
        doctor_id: str,
        year: int,
        month: int,
        today: Optional[date] = None
    ) -> List[CalendarDay]:
        """Build the 42-day calendar grid for a month"""
        if not 1 <= month <= 12:
            raise ValidationException("month", "month must be between 1 and 12")

        today = today or self._today()
        available_days = {r.day_of_week for r in self.availability_repo.get_active(self.db, doctor_id)}
        return ScheduleCalculator.build_month_grid(year, month, today, available_days)

    def generate_schedule(
        self,
        doctor_id: str,
        days: int = SCHEDULE_LOOKAHEAD_DAYS,
        today: Optional[date] = None
    ) -> List[DaySchedule]:
        """
        Generate day-by-day slots for the next N days starting today.

        Args:
            doctor_id: Doctor to schedule against
            days: Number of days to include
            today: First day of the schedule (defaults to local today)

        Returns:
            One DaySchedule per day, days without availability have no slots
        """
        today = today or self._today()

        rules_by_day = defaultdict(list)
        for row in self.availability_repo.get_active(self.db, doctor_id):
            rules_by_day[row.day_of_week].append(_to_rule(row))

        schedule = []
        for offset in range(days):
            current = today + timedelta(days=offset)
            day_of_week = self.date_service.sunday_weekday(current)
            rules = rules_by_day.get(day_of_week)

            slots: List[TimeSlot] = []
            if rules:
                appointments = self.appointment_repo.get_scheduled_for_date(self.db, doctor_id, current)
                booked = {a.appointment_time: a.id for a in appointments}
                slots = ScheduleCalculator.generate_slots(rules, booked, current)

            schedule.append(DaySchedule(
                date=current,
                day_name=WEEKDAY_NAMES[day_of_week],
                time_slots=slots
            ))

        return schedule

    def create_appointment(self, data: AppointmentCreate, today: Optional[date] = None) -> Appointment:
        """
        Book an appointment.

        Raises:
            ValidationException: If the date is in the past
            SlotUnavailableException: If the slot is not offered or already booked
        """
        today = today or self._today()
        if data.appointment_date < today:
            raise ValidationException("appointment_date", "cannot book an appointment in the past")

        slot_time = self.date_service.parse_time(data.appointment_time)
        slots = self.get_available_slots(data.doctor_id, data.appointment_date)
        if not any(slot.time == slot_time and slot.available for slot in slots):
            raise SlotUnavailableException(
                data.doctor_id, f"{data.appointment_date} {self.date_service.format_time(slot_time)}"
            )

        appointment = Appointment(
            patient_id=data.patient_id,
            doctor_id=data.doctor_id,
            appointment_date=data.appointment_date,
            appointment_time=slot_time,
            status=APPOINTMENT_STATUS_SCHEDULED,
            notes=data.notes
        )
        appointment = self.appointment_repo.create(self.db, appointment)
        logger.info(f"Appointment {appointment.id} booked for {data.patient_id} on {data.appointment_date} {data.appointment_time}")
        return appointment

    def _get_or_raise(self, appointment_id: int) -> Appointment:
        appointment = self.appointment_repo.get_by_id(self.db, appointment_id)
        if not appointment:
            raise AppointmentNotFoundException(appointment_id)
        return appointment

    def cancel_appointment(self, appointment_id: int, reason: str) -> Appointment:
        """Cancel an appointment, freeing its slot"""
        appointment = self._get_or_raise(appointment_id)
        appointment.status = APPOINTMENT_STATUS_CANCELLED
        appointment.cancellation_reason = reason
        appointment.updated_at = self._now()
        logger.info(f"Appointment {appointment_id} cancelled: {reason}")
        return self.appointment_repo.update(self.db, appointment)

    def complete_appointment(self, appointment_id: int, notes: Optional[str] = None) -> Appointment:
        appointment = self._get_or_raise(appointment_id)
        appointment.status = APPOINTMENT_STATUS_COMPLETED
        if notes is not None:
            appointment.notes = notes
        appointment.updated_at = self._now()
        return self.appointment_repo.update(self.db, appointment)
