"""
Appointment repository - Data access layer for appointments and availability.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_

from emolink.models import Appointment, DoctorAvailability
from emolink.constants import APPOINTMENT_STATUS_SCHEDULED


class AvailabilityRepository:
    """Repository for DoctorAvailability data access"""

    @staticmethod
    def get_active(db: Session, doctor_id: str) -> List[DoctorAvailability]:
        """Get all active availability rules for a doctor"""
        return db.query(DoctorAvailability).filter(
            and_(
                DoctorAvailability.doctor_id == doctor_id,
                DoctorAvailability.is_active == True
            )
        ).order_by(DoctorAvailability.day_of_week, DoctorAvailability.start_time).all()

    @staticmethod
    def get_active_for_day(db: Session, doctor_id: str, day_of_week: int) -> List[DoctorAvailability]:
        """Get active rules for one weekday (0 = Sunday)"""
        return db.query(DoctorAvailability).filter(
            and_(
                DoctorAvailability.doctor_id == doctor_id,
                DoctorAvailability.day_of_week == day_of_week,
                DoctorAvailability.is_active == True
            )
        ).order_by(DoctorAvailability.id).all()

    @staticmethod
    def create(db: Session, rule: DoctorAvailability) -> DoctorAvailability:
        """Create new availability rule"""
        db.add(rule)
        db.commit()
        db.refresh(rule)
        return rule


class AppointmentRepository:
    """Repository for Appointment data access"""

    @staticmethod
    def get_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID"""
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_for_patient(db: Session, patient_id: str) -> List[Appointment]:
        """Get a patient's appointments, latest first"""
        return db.query(Appointment).filter(
            Appointment.patient_id == patient_id
        ).order_by(
            Appointment.appointment_date.desc(),
            Appointment.appointment_time.desc()
        ).all()

    @staticmethod
    def get_scheduled_for_date(db: Session, doctor_id: str, target_date: date) -> List[Appointment]:
        """Get appointments occupying a doctor's slots on a date (cancelled ones excluded)"""
        return db.query(Appointment).filter(
            and_(
                Appointment.doctor_id == doctor_id,
                Appointment.appointment_date == target_date,
                Appointment.status == APPOINTMENT_STATUS_SCHEDULED
            )
        ).all()

    @staticmethod
    def create(db: Session, appointment: Appointment) -> Appointment:
        """Create new appointment"""
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update(db: Session, appointment: Appointment) -> Appointment:
        """Update existing appointment"""
        db.commit()
        db.refresh(appointment)
        return appointment
