"""
Date Range Resolution

Turns an inclusive (start, end) pair of ISO dates, or a named preset resolved
against an explicitly supplied "today", into an ordered, gap-free list of
ISO dates. Nothing here reads the system clock, so results are reproducible.

Usage:
    from nitya.services.analytics.date_range import get_dates_in_range, resolve_preset

    get_dates_in_range("2024-01-01", "2024-01-03")
    # ["2024-01-01", "2024-01-02", "2024-01-03"]

    resolve_preset("lastweek", today="2024-01-10")
    # DateRange(start_date="2024-01-04", end_date="2024-01-10", label="Last 7 Days")
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from pydantic import ValidationError

from nitya.config import settings, yaml_config
from nitya.models.analytics import DateRange, RangePreset

logger = logging.getLogger(__name__)

DateLike = Union[str, date]

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

DEFAULT_PRESETS = [
    RangePreset(id="last3days", label="Last 3 Days", days=3),
    RangePreset(id="lastweek", label="Last 7 Days", days=7),
    RangePreset(id="last2weeks", label="Last 2 Weeks", days=14),
    RangePreset(id="lastmonth", label="Last 30 Days", days=30),
    RangePreset(id="last3months", label="Last 3 Months", months=3),
    RangePreset(id="week", label="Last 7 Days", days=7),
    RangePreset(id="month", label="Last 30 Days", days=30),
    RangePreset(id="year", label="Last Year", days=365),
]


def parse_iso_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Parse an ISO (YYYY-MM-DD) date.

    Args:
        value: ISO string or date.

    Returns:
        The date, or None if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def get_dates_in_range(start_date: DateLike, end_date: DateLike) -> list[str]:
    """
    Get all dates between start and end (inclusive).

    Args:
        start_date: First day of the range.
        end_date: Last day of the range.

    Returns:
        ISO dates in ascending order. Empty when start is after end or either
        bound is not a valid date.
    """
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)

    if start is None or end is None:
        logger.warning(f"Invalid date range {start_date!r}..{end_date!r}")
        return []

    span = (end - start).days
    return [(start + timedelta(days=offset)).isoformat() for offset in range(span + 1)]


def get_day_name(value: DateLike) -> str:
    """Short weekday label (Mon..Sun) for a date."""
    day = parse_iso_date(value)
    return WEEKDAY_LABELS[day.weekday()] if day else ""


def subtract_months(day: date, months: int) -> date:
    """Same day `months` calendar months earlier, clamped to the month's end."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def list_presets() -> list[RangePreset]:
    """
    Get the configured range presets.

    Presets come from the analytics.presets section of config/default.yaml;
    the built-in catalogue is used when that section is missing or holds no
    valid entries.
    """
    raw_presets = (yaml_config.get("analytics") or {}).get("presets") or []

    presets = []
    for raw in raw_presets:
        try:
            presets.append(RangePreset.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid range preset {raw!r}: {e}")

    return presets or list(DEFAULT_PRESETS)


def get_preset(preset_id: str) -> Optional[RangePreset]:
    """Look up a preset by id."""
    return next((p for p in list_presets() if p.id == preset_id), None)


def resolve_preset(preset_id: Optional[str], today: DateLike) -> DateRange:
    """
    Resolve a preset into a concrete date range ending today.

    A "last N days" preset starts N-1 days before today. Unknown presets fall
    back to a single-day range covering today.

    Args:
        preset_id: Preset identifier (e.g. "lastweek"), or None for the
            configured DEFAULT_PRESET.
        today: Reference date supplied by the caller.

    Returns:
        DateRange with ISO bounds. Both bounds are empty strings when today
        cannot be parsed, which resolves to an empty date sequence.
    """
    preset_id = preset_id or settings.DEFAULT_PRESET
    end = parse_iso_date(today)
    if end is None:
        logger.warning(f"Cannot resolve preset {preset_id!r}: invalid today {today!r}")
        return DateRange(start_date="", end_date="", label="")

    preset = get_preset(preset_id)
    if preset is None:
        logger.warning(f"Unknown range preset {preset_id!r}, using today only")
        return DateRange(start_date=end.isoformat(), end_date=end.isoformat(), label="Today")

    if preset.months is not None:
        start = subtract_months(end, preset.months)
    else:
        start = end - timedelta(days=preset.days - 1)

    return DateRange(
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        label=preset.label,
    )
