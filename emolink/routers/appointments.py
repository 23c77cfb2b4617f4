"""
Appointment HTTP routes.
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from emolink.database import get_db
from emolink.auth import verify_api_key
from emolink.constants import SCHEDULE_LOOKAHEAD_DAYS
from emolink.schemas import (
    AppointmentCreate, AppointmentCancel, AppointmentComplete, AppointmentResponse,
    AvailabilityCreate, AvailabilityResponse,
    TimeSlotResponse, CalendarDayResponse, DayScheduleResponse
)
from emolink.services.appointment_service import AppointmentService
from emolink.services.date_service import DateService
from emolink.services.schedule_service import TimeSlot

router = APIRouter(prefix="/api/appointments", tags=["appointments"], dependencies=[Depends(verify_api_key)])


def _slot_response(slot: TimeSlot) -> dict:
    return {
        "time": DateService.format_time(slot.time),
        "available": slot.available,
        "booking_id": slot.booking_id
    }


@router.get("/users/{user_id}", response_model=List[AppointmentResponse])
def get_user_appointments(user_id: str, db: Session = Depends(get_db)):
    return AppointmentService(db).get_user_appointments(user_id)


@router.get("/doctors/{doctor_id}/availability", response_model=List[AvailabilityResponse])
def get_doctor_availability(doctor_id: str, db: Session = Depends(get_db)):
    return AppointmentService(db).get_doctor_availability(doctor_id)


@router.post(
    "/doctors/{doctor_id}/availability",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_201_CREATED
)
def add_availability(doctor_id: str, rule: AvailabilityCreate, db: Session = Depends(get_db)):
    return AppointmentService(db).add_availability(doctor_id, rule)


@router.get("/doctors/{doctor_id}/slots", response_model=List[TimeSlotResponse])
def get_available_slots(
    doctor_id: str,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db)
):
    """Get hourly slots for a date with availability flags."""
    slots = AppointmentService(db).get_available_slots(doctor_id, target_date)
    return [_slot_response(slot) for slot in slots]


@router.get("/doctors/{doctor_id}/calendar", response_model=List[CalendarDayResponse])
def get_month_calendar(
    doctor_id: str,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    today: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    """Get the 6-week calendar grid for a month."""
    return AppointmentService(db).get_month_calendar(doctor_id, year, month, today)


@router.get("/doctors/{doctor_id}/schedule", response_model=List[DayScheduleResponse])
def get_schedule(
    doctor_id: str,
    days: int = Query(SCHEDULE_LOOKAHEAD_DAYS, ge=1, le=120),
    db: Session = Depends(get_db)
):
    """Get day-by-day slots starting today."""
    schedule = AppointmentService(db).generate_schedule(doctor_id, days)
    return [
        {
            "date": day.date,
            "day_name": day.day_name,
            "time_slots": [_slot_response(slot) for slot in day.time_slots]
        }
        for day in schedule
    ]


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(appointment: AppointmentCreate, db: Session = Depends(get_db)):
    return AppointmentService(db).create_appointment(appointment)


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(appointment_id: int, payload: AppointmentCancel, db: Session = Depends(get_db)):
    return AppointmentService(db).cancel_appointment(appointment_id, payload.reason)


@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
def complete_appointment(appointment_id: int, payload: AppointmentComplete, db: Session = Depends(get_db)):
    return AppointmentService(db).complete_appointment(appointment_id, payload.notes)
