"""Holiday calendar backed by the ``holidays`` table."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import select

from overtime_kernel.domain.claims import Holiday
from overtime_kernel.models.holiday import HolidayModel
from overtime_kernel.stores.base import BaseStore


class SqlHolidayCalendar(BaseStore):
    """
    Holiday lookups by calendar day.

    When ``region`` is set, only holidays for that region or with no
    region (nationwide) match.
    """

    def __init__(self, session, region: str | None = None):
        super().__init__(session)
        self.region = region

    def holiday_details(self, day: date) -> Holiday | None:
        if isinstance(day, datetime):
            day = day.date()
        stmt = select(HolidayModel).where(HolidayModel.holiday_date == day)
        if self.region is not None:
            stmt = stmt.where(
                (HolidayModel.region == self.region) | HolidayModel.region.is_(None)
            )
        row = self.session.execute(stmt.order_by(HolidayModel.name)).scalars().first()
        return row.to_dto() if row is not None else None

    def is_holiday(self, day: date) -> bool:
        return self.holiday_details(day) is not None

    def add_holiday(self, holiday: Holiday) -> Holiday:
        self.session.add(HolidayModel.from_dto(holiday))
        self.session.flush()
        return holiday
