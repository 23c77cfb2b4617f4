from pydantic import BaseModel, Field, field_validator
from datetime import datetime, date, time
from typing import List, Optional

from emolink.constants import (
    INTENSITY_MIN, INTENSITY_MAX, ACTIVITY_TYPES, DEFAULT_DOCTOR_ID
)


# Diary schemas
class EmotionEntryBase(BaseModel):
    emotion_type: str = Field(..., min_length=1, max_length=50)
    emotion_description: Optional[str] = Field(None, max_length=2000)
    intensity: int = Field(default=3, ge=INTENSITY_MIN, le=INTENSITY_MAX)

class EmotionEntryCreate(EmotionEntryBase):
    user_id: str = Field(..., min_length=1)

class EmotionEntryUpdate(BaseModel):
    emotion_type: Optional[str] = Field(None, min_length=1, max_length=50)
    emotion_description: Optional[str] = Field(None, max_length=2000)
    intensity: Optional[int] = Field(None, ge=INTENSITY_MIN, le=INTENSITY_MAX)

class EmotionEntryResponse(EmotionEntryBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EntryPageResponse(BaseModel):
    entries: List[EmotionEntryResponse]
    total: int
    has_more: bool


# Streak schemas
class StreakResponse(BaseModel):
    user_id: str
    current_streak: int
    longest_streak: int
    last_entry_date: Optional[date] = None
    milestone: Optional[int] = None  # 3, 7, 30 or 180 when just reached

class EntryCreatedResponse(BaseModel):
    entry: EmotionEntryResponse
    points: Optional[int] = None  # New total, None if points could not be awarded
    streak: StreakResponse
    completed_goals: List[int] = []  # IDs of goals this entry completed


# Availability schemas
class AvailabilityCreate(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6)  # 0=Sunday
    start_time: time
    end_time: time

class AvailabilityResponse(AvailabilityCreate):
    id: int
    doctor_id: str
    is_active: bool

    class Config:
        from_attributes = True

class TimeSlotResponse(BaseModel):
    time: str  # HH:MM
    available: bool
    booking_id: Optional[int] = None

class CalendarDayResponse(BaseModel):
    date: date
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_past: bool
    has_available_slots: bool

    class Config:
        from_attributes = True

class DayScheduleResponse(BaseModel):
    date: date
    day_name: str
    time_slots: List[TimeSlotResponse]


# Appointment schemas
class AppointmentCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    doctor_id: str = Field(default=DEFAULT_DOCTOR_ID, min_length=1)
    appointment_date: date
    appointment_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")  # HH:MM
    notes: Optional[str] = Field(None, max_length=1000)

class AppointmentCancel(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)

class AppointmentComplete(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)

class AppointmentResponse(BaseModel):
    id: int
    patient_id: str
    doctor_id: str
    appointment_date: date
    appointment_time: time
    status: str
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    patient_name: Optional[str] = None
    doctor_name: Optional[str] = None

    class Config:
        from_attributes = True


# Points schemas
class PointsAdd(BaseModel):
    points: int
    activity_type: Optional[str] = None
    description: Optional[str] = Field(None, max_length=200)
    parent: bool = False  # Credit parent_points instead of points

    @field_validator("activity_type")
    @classmethod
    def check_activity_type(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in ACTIVITY_TYPES:
            raise ValueError(f"activity_type must be one of {', '.join(ACTIVITY_TYPES)}")
        return value

class PointsResponse(BaseModel):
    user_id: str
    points: int

class PointHistoryResponse(BaseModel):
    id: int
    user_id: str
    activity_type: str
    description: str
    points: int
    created_at: datetime

    class Config:
        from_attributes = True

class PointHistoryPage(BaseModel):
    items: List[PointHistoryResponse]
    total_count: int
    has_more: bool


# Goal schemas
class WeeklyGoalCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    emotion_type: str = Field(..., min_length=1, max_length=50)
    timeframe: str = Field(default="weekly", pattern=r"^(weekly|biweekly|monthly)$")

class WeeklyGoalResponse(BaseModel):
    id: int
    user_id: str
    emotion_type: str
    target_count: int
    timeframe: str
    start_date: datetime
    end_date: datetime
    bonus_points: int
    progress: int
    completed: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
