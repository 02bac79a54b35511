"""
Configuration loader (``overtime_config.loader``).

Responsibility
--------------
Reads YAML files and parses them into the kernel's frozen
``OvertimeConfig`` schema, plus holiday seed lists for the operator CLI.
Runtime callers go through ``overtime_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``overtime:`` mapping or unknown keys  -> ``ValueError``.
* Out-of-range values  -> ``ValueError`` from ``OvertimeConfig``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from overtime_kernel.domain.claims import Holiday
from overtime_kernel.domain.config import OvertimeConfig

_DECIMAL_FIELDS = frozenset({
    "max_ot_hours",
    "warning_threshold",
    "max_hours_per_session",
    "min_rest_gap_hours",
    "hours_per_leave_day",
})
_INT_FIELDS = frozenset({
    "max_future_days",
    "public_holiday_multiplier",
    "activity_log_retention_days",
})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return the parsed dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _DECIMAL_FIELDS:
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"{name} must be a number, got {value!r}") from None
    if name in _INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
    return str(value)


def parse_overtime_config(data: dict[str, Any]) -> OvertimeConfig:
    """
    Build an ``OvertimeConfig`` from the ``overtime:`` mapping of a file.

    Missing keys take the schema defaults.
    """
    section = data.get("overtime")
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ValueError("'overtime' must be a mapping")

    known = {f.name for f in fields(OvertimeConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown overtime config keys: {', '.join(unknown)}")

    kwargs = {name: _coerce(name, value) for name, value in section.items()}
    # A null timezone means "use the default".
    if kwargs.get("local_timezone") is None:
        kwargs.pop("local_timezone", None)
    return OvertimeConfig(**kwargs)


def load_config(path: Path) -> OvertimeConfig:
    return parse_overtime_config(load_yaml_file(Path(path)))


def parse_holidays(data: dict[str, Any]) -> list[Holiday]:
    """
    Parse a ``holidays:`` list of ``{date, name, region?}`` entries.

    ``year`` is derived from the date.
    """
    entries = data.get("holidays") or []
    if not isinstance(entries, list):
        raise ValueError("'holidays' must be a list")

    holidays = []
    for entry in entries:
        if "date" not in entry or "name" not in entry:
            raise ValueError(f"Holiday entry needs 'date' and 'name': {entry!r}")
        day = entry["date"]
        if not isinstance(day, date):
            day = date.fromisoformat(str(day))
        holidays.append(
            Holiday(
                holiday_date=day,
                name=str(entry["name"]),
                year=day.year,
                region=entry.get("region"),
            )
        )
    return holidays


def load_holidays(path: Path) -> list[Holiday]:
    return parse_holidays(load_yaml_file(Path(path)))


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON form of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
