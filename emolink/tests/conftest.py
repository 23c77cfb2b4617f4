"""
Shared fixtures: in-memory database sessions and an authenticated API client.
"""
import os

os.environ.setdefault("EMOLINK_DATABASE_URL", "sqlite://")
os.environ.setdefault("EMOLINK_LOG_DIR", "./logs")
os.environ.setdefault("EMOLINK_TIMEZONE", "")

import pytest
from datetime import date, datetime, time, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from emolink.database import Base, get_db
from emolink import constants
from emolink.models import EmotionEntry, DoctorAvailability, Appointment, Profile, WeeklyGoal

DOCTOR_ID = "doctor-1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date(2024, 6, 11)  # Tuesday


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from emolink.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api_headers():
    return {"X-API-Key": constants.API_KEY}


def add_entry(db, user_id: str, created_at: datetime, emotion_type: str = "alegria") -> EmotionEntry:
    """Insert a diary entry with a fixed timestamp"""
    entry = EmotionEntry(
        user_id=user_id,
        emotion_type=emotion_type,
        emotion_description="test",
        intensity=3,
        created_at=created_at,
        updated_at=created_at
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def add_rule(db, day_of_week: int, start: str, end: str, doctor_id: str = DOCTOR_ID,
             is_active: bool = True) -> DoctorAvailability:
    """Insert an availability rule, times as HH:MM"""
    sh, sm = (int(p) for p in start.split(":"))
    eh, em = (int(p) for p in end.split(":"))
    rule = DoctorAvailability(
        doctor_id=doctor_id,
        day_of_week=day_of_week,
        start_time=time(sh, sm),
        end_time=time(eh, em),
        is_active=is_active
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


def add_appointment(db, appointment_date: date, appointment_time: time, status: str = "scheduled",
                    patient_id: str = "patient-1", doctor_id: str = DOCTOR_ID) -> Appointment:
    appointment = Appointment(
        patient_id=patient_id,
        doctor_id=doctor_id,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        status=status
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def add_profile(db, user_id: str, full_name: str = None, **kwargs) -> Profile:
    profile = Profile(user_id=user_id, full_name=full_name, **kwargs)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def add_goal(db, user_id: str, start: datetime, emotion_type: str = "alegria", days: int = 7,
             target_count: int = 7, bonus_points: int = 5, completed: bool = False) -> WeeklyGoal:
    """Insert a goal with a fixed window"""
    goal = WeeklyGoal(
        user_id=user_id,
        emotion_type=emotion_type,
        target_count=target_count,
        timeframe="weekly",
        start_date=start,
        end_date=start + timedelta(days=days),
        bonus_points=bonus_points,
        progress=0,
        completed=completed,
        created_at=start
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal
