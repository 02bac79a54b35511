"""
Overtime configuration schema (``overtime_kernel.domain.config``).

Defines the limits, thresholds, and conversion rates that every engine
component receives at construction time.  Defaults are the organisation's
standard policy; override at instantiation:

    config = OvertimeConfig(
        max_ot_hours=Decimal("80"),
        warning_threshold=Decimal("70"),
    )

Loading from YAML lives in ``overtime_config``; the kernel never reads
files or environment variables.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import cached_property
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from overtime_kernel.logging_config import get_logger

logger = get_logger("domain.config")


@dataclass(frozen=True)
class OvertimeConfig:
    """
    Configuration schema for the overtime engine.

    Field defaults represent the standard policy.
    """

    # Monthly quota
    max_ot_hours: Decimal = Decimal("104")
    warning_threshold: Decimal = Decimal("90")

    # Per-session rules
    max_hours_per_session: Decimal = Decimal("12")
    min_rest_gap_hours: Decimal = Decimal("4")
    max_future_days: int = 7

    # Conversion
    hours_per_leave_day: Decimal = Decimal("6")
    public_holiday_multiplier: int = 2

    # Calendar
    local_timezone: str = "UTC"
    holiday_region: str | None = None

    # Retention
    activity_log_retention_days: int = 365

    def __post_init__(self):
        for name in (
            "max_ot_hours",
            "warning_threshold",
            "max_hours_per_session",
            "hours_per_leave_day",
        ):
            if Decimal(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive")
        if Decimal(self.min_rest_gap_hours) < 0:
            raise ValueError("min_rest_gap_hours cannot be negative")
        if self.warning_threshold > self.max_ot_hours:
            raise ValueError(
                f"warning_threshold ({self.warning_threshold}) cannot exceed "
                f"max_ot_hours ({self.max_ot_hours})"
            )
        if self.max_future_days < 0:
            raise ValueError("max_future_days cannot be negative")
        if self.public_holiday_multiplier < 1:
            raise ValueError("public_holiday_multiplier must be at least 1")
        if self.activity_log_retention_days <= 0:
            raise ValueError("activity_log_retention_days must be positive")
        try:
            ZoneInfo(self.local_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Unknown local_timezone: {self.local_timezone}"
            ) from None

        logger.debug(
            "overtime_config_initialized",
            extra={
                "max_ot_hours": str(self.max_ot_hours),
                "warning_threshold": str(self.warning_threshold),
                "max_hours_per_session": str(self.max_hours_per_session),
                "local_timezone": self.local_timezone,
            },
        )

    @cached_property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.local_timezone)
