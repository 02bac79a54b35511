"""
HolidayLookup -- calendar-day holiday matching.

A lookup miss is not an error: ``is_holiday`` answers False and
``holiday_details`` answers None.  Time of day is ignored.
"""

from __future__ import annotations

from datetime import date, datetime

from overtime_kernel.domain.claims import Holiday
from overtime_kernel.logging_config import get_logger
from overtime_kernel.ports import HolidayCalendar

logger = get_logger("services.holiday")


class HolidayLookup:
    """Thin façade over an externally supplied holiday calendar."""

    def __init__(self, calendar: HolidayCalendar) -> None:
        self._calendar = calendar

    @staticmethod
    def _as_date(day: date | datetime) -> date:
        return day.date() if isinstance(day, datetime) else day

    def holiday_details(self, day: date | datetime) -> Holiday | None:
        holiday = self._calendar.holiday_details(self._as_date(day))
        if holiday is not None:
            logger.debug(
                "holiday_matched",
                extra={"date": self._as_date(day).isoformat(), "holiday": holiday.name},
            )
        return holiday

    def is_holiday(self, day: date | datetime) -> bool:
        return self.holiday_details(day) is not None
