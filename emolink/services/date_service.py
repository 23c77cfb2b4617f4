"""
Date calculation and manipulation service.
Handles the local-calendar timezone policy, time parsing and day ranges.
"""
from datetime import datetime, timedelta, date, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from emolink.constants import LOCAL_TIMEZONE
from emolink.exceptions import InvalidTimeFormatException

logger = logging.getLogger("emolink.dates")


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def get_local_timezone(tz_name: Optional[str] = None) -> Optional[tzinfo]:
        """
        Resolve the timezone used for civil dates.

        Args:
            tz_name: IANA timezone name, defaults to EMOLINK_TIMEZONE

        Returns:
            ZoneInfo for the configured name, or None for the server's local time
        """
        name = LOCAL_TIMEZONE if tz_name is None else tz_name
        if not name:
            return None
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{name}', falling back to server local time")
            return None

    @staticmethod
    def to_civil_date(instant: datetime, tz: Optional[tzinfo] = None) -> date:
        """
        Derive the local calendar date of an instant.

        Aware datetimes are converted to the local timezone before the time
        component is dropped. Naive datetimes are already local.

        Args:
            instant: Timestamp of an activity
            tz: Target timezone (None = server local time)

        Returns:
            Local calendar date
        """
        if instant.tzinfo is None:
            return instant.date()
        return instant.astimezone(tz).date()

    @staticmethod
    def get_local_today(tz: Optional[tzinfo] = None) -> date:
        """Get today's date in the local timezone"""
        return datetime.now(tz).date()

    @staticmethod
    def local_now(tz: Optional[tzinfo] = None) -> datetime:
        """
        Current wall-clock time in the local timezone, without tzinfo.

        Stored timestamps are naive local times, so they must be stamped in
        the same timezone that to_civil_date and get_local_today use.
        """
        if tz is None:
            return datetime.now()
        return datetime.now(tz).replace(tzinfo=None)

    @staticmethod
    def sunday_weekday(target_date: date) -> int:
        """Day of week with 0 = Sunday .. 6 = Saturday"""
        return (target_date.weekday() + 1) % 7

    @staticmethod
    def parse_time(time_str: str) -> time:
        """
        Parse time string into a civil time.

        Args:
            time_str: Time string in "HH:MM" or "HH:MM:SS" format

        Returns:
            Parsed time

        Raises:
            InvalidTimeFormatException: If time string is invalid
        """
        parts = (time_str or "").strip().split(":")
        if len(parts) not in (2, 3):
            raise InvalidTimeFormatException(time_str)
        try:
            hour = int(parts[0])
            minute = int(parts[1])
            second = int(parts[2]) if len(parts) == 3 else 0
            return time(hour, minute, second)
        except ValueError:
            raise InvalidTimeFormatException(time_str)

    @staticmethod
    def format_time(value: time) -> str:
        """Format a civil time as HH:MM"""
        return value.strftime("%H:%M")

    @staticmethod
    def get_day_range(target_date: date) -> tuple[datetime, datetime]:
        """
        Get datetime range for a full day (midnight to midnight).

        Args:
            target_date: Date to get range for

        Returns:
            Tuple of (day_start, day_end) datetimes
        """
        day_start = datetime.combine(target_date, datetime.min.time())
        day_end = datetime.combine(target_date + timedelta(days=1), datetime.min.time())
        return day_start, day_end
