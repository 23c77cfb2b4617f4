"""
Appointment availability calculations.
Derives bookable slots from weekly availability rules and builds the
month calendar grid shown on the scheduling screen.
"""
from dataclasses import dataclass, field
from datetime import datetime, date, time, timedelta
from typing import Iterable, List, Mapping, Optional

from emolink.constants import SLOT_LENGTH_MINUTES, CALENDAR_GRID_DAYS
from emolink.services.date_service import DateService


@dataclass(frozen=True)
class AvailabilityRule:
    """Recurring weekly availability window (0 = Sunday)"""
    day_of_week: int
    start_time: time
    end_time: time
    is_active: bool = True


@dataclass(frozen=True)
class TimeSlot:
    time: time
    available: bool
    booking_id: Optional[int] = None


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_past: bool
    has_available_slots: bool


@dataclass
class DaySchedule:
    date: date
    day_name: str
    time_slots: List[TimeSlot] = field(default_factory=list)


class ScheduleCalculator:
    """Pure slot and calendar computations"""

    @staticmethod
    def generate_slots(
        rules: Iterable[AvailabilityRule],
        booked: Mapping[time, Optional[int]],
        target_date: date
    ) -> List[TimeSlot]:
        """
        Enumerate hourly slots for a date.

        Each rule yields slots from start_time up to (not including) end_time.
        Rules are neither sorted nor merged, so overlapping rules produce
        duplicate slots. A rule with start_time >= end_time yields nothing.

        Args:
            rules: Active rules for the provider, already matching the target weekday
            booked: Occupied civil times mapped to the booking id holding them
            target_date: Date the slots belong to

        Returns:
            Slots in per-rule enumeration order
        """
        step = timedelta(minutes=SLOT_LENGTH_MINUTES)
        slots: List[TimeSlot] = []

        for rule in rules:
            current = datetime.combine(target_date, rule.start_time)
            end = datetime.combine(target_date, rule.end_time)

            while current < end:
                slot_time = current.time()
                is_booked = slot_time in booked
                slots.append(TimeSlot(
                    time=slot_time,
                    available=not is_booked,
                    booking_id=booked.get(slot_time) if is_booked else None
                ))
                current += step

        return slots

    @staticmethod
    def build_month_grid(
        year: int,
        month: int,
        today: date,
        available_days_of_week: Iterable[int]
    ) -> List[CalendarDay]:
        """
        Build the 6-week calendar grid for a month.

        The grid starts on the Sunday on or before the 1st. A day has available
        slots only if it is in the month, not in the past and its weekday has
        an availability rule.

        Args:
            year: Year to render
            month: Month to render (1-12)
            today: Caller's local date
            available_days_of_week: Weekdays (0 = Sunday) with availability

        Returns:
            42 CalendarDay cells in ascending date order
        """
        available_days = set(available_days_of_week)
        first_day = date(year, month, 1)
        start_date = first_day - timedelta(days=DateService.sunday_weekday(first_day))

        days: List[CalendarDay] = []
        for offset in range(CALENDAR_GRID_DAYS):
            current = start_date + timedelta(days=offset)
            is_current_month = current.year == year and current.month == month
            is_past = current < today

            days.append(CalendarDay(
                date=current,
                day_of_month=current.day,
                is_current_month=is_current_month,
                is_today=current == today,
                is_past=is_past,
                has_available_slots=(
                    is_current_month
                    and not is_past
                    and DateService.sunday_weekday(current) in available_days
                )
            ))

        return days
