"""Rendering of message timestamps according to the user's settings."""

from __future__ import annotations

from datetime import datetime

from . import config
from .config import TimeFormat


def time_to_local_string(moment: datetime) -> str:
    """Convert to local time, then format according to the settings."""
    return time_to_string(moment.astimezone())


def time_to_string(moment: datetime) -> str:
    """Format a time according to the configured time format."""
    time_format = config.get_config().times
    if time_format == TimeFormat.HOUR_MINUTE_AND_SECONDS:
        return moment.strftime("%H:%M:%S")
    if time_format == TimeFormat.HOUR_AND_MINUTE:
        return moment.strftime("%H:%M")
    return ""


def are_dates_the_same_day(first: datetime, second: datetime) -> bool:
    """Return True if both times fall on the same day of the same year."""
    return (
        first.year == second.year
        and first.timetuple().tm_yday == second.timetuple().tm_yday
    )