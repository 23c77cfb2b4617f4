"""
Application constants and environment-driven configuration.
"""
import os

# Environment
DATABASE_URL = os.getenv("EMOLINK_DATABASE_URL", "sqlite:///./emolink.db")
API_KEY = os.getenv("EMOLINK_API_KEY", "your-secret-key-change-me")
# IANA timezone name used to derive civil dates; empty = server local time
LOCAL_TIMEZONE = os.getenv("EMOLINK_TIMEZONE", "")

DEFAULT_LOG_DIRECTORY_PROD = "/var/log/emolink"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "EMOLINK_CORS_ORIGINS",
        "http://localhost:8081,http://localhost:19006"
    ).split(",")
    if origin.strip()
]

# Streak refresh job time (HH:MM)
STREAK_REFRESH_TIME = os.getenv("EMOLINK_STREAK_REFRESH_TIME", "00:05")

# The app schedules against a single fixed provider
DEFAULT_DOCTOR_ID = os.getenv("EMOLINK_DOCTOR_ID", "b46ab255-8937-4904-9ba1-3d533027b0d9")
DEFAULT_DOCTOR_NAME = os.getenv("EMOLINK_DOCTOR_NAME", "Dra Ana Claudia Cavalcanti")

# Roles
ROLE_PARENT_CHILD = "parent_child"
ROLE_DOCTOR = "doctor"

# Appointment statuses
APPOINTMENT_STATUS_SCHEDULED = "scheduled"
APPOINTMENT_STATUS_CANCELLED = "cancelled"
APPOINTMENT_STATUS_COMPLETED = "completed"

# Points activity types
ACTIVITY_DAILY_CHALLENGE = "daily_challenge"
ACTIVITY_WEEKLY_CHALLENGE = "weekly_challenge"
ACTIVITY_FAMILY_CHALLENGE = "family_challenge"
ACTIVITY_DIARY_ENTRY = "diary_entry"
ACTIVITY_STORY_READING = "story_reading"
ACTIVITY_GOAL_COMPLETED = "goal_completed"

ACTIVITY_TYPES = (
    ACTIVITY_DAILY_CHALLENGE,
    ACTIVITY_WEEKLY_CHALLENGE,
    ACTIVITY_FAMILY_CHALLENGE,
    ACTIVITY_DIARY_ENTRY,
    ACTIVITY_STORY_READING,
    ACTIVITY_GOAL_COMPLETED,
)

POINTS_PER_DIARY_ENTRY = 10

# Diary
INTENSITY_MIN = 1
INTENSITY_MAX = 5
DEFAULT_PAGE_SIZE = 10

# Streaks
STREAK_MILESTONES = (3, 7, 30, 180)

# Scheduling
SLOT_LENGTH_MINUTES = 60
CALENDAR_GRID_DAYS = 42  # 6 full weeks
SCHEDULE_LOOKAHEAD_DAYS = 60

# Sunday-based weekday names (0 = Sunday)
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Emotion goals: timeframe -> (days, target_count, bonus_points)
GOAL_TIMEFRAME_WEEKLY = "weekly"
GOAL_TIMEFRAME_BIWEEKLY = "biweekly"
GOAL_TIMEFRAME_MONTHLY = "monthly"

GOAL_TIMEFRAMES = {
    GOAL_TIMEFRAME_WEEKLY: (7, 7, 5),
    GOAL_TIMEFRAME_BIWEEKLY: (14, 14, 10),
    GOAL_TIMEFRAME_MONTHLY: (30, 30, 15),
}
