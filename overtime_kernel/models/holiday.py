"""
Module: overtime_kernel.models.holiday
Responsibility: ORM persistence for designated holidays (static reference data).
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import Base
from overtime_kernel.domain.claims import Holiday


class HolidayModel(Base):
    """A holiday for one calendar day, optionally scoped to a region."""

    __tablename__ = "holidays"

    __table_args__ = (
        UniqueConstraint("holiday_date", "region", name="uq_holiday_date_region"),
    )

    holiday_date: Mapped[date] = mapped_column(nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def to_dto(self) -> Holiday:
        return Holiday(
            holiday_date=self.holiday_date,
            name=self.name,
            year=self.year,
            region=self.region,
        )

    @classmethod
    def from_dto(cls, dto: Holiday) -> HolidayModel:
        return cls(
            holiday_date=dto.holiday_date,
            name=dto.name,
            year=dto.year,
            region=dto.region,
        )
