"""
Display formatting for durations and solve timestamps.

Examples:
    format_time(0)          -> "00:00.00"
    format_time(83_450)     -> "01:23.45"
    format_time(3_661_000)  -> "01:01:01.00"
"""

from datetime import datetime, timezone
from typing import Optional

from .clock import HOUR_MS, MINUTE_MS, SECOND_MS


def format_time(duration_ms: int) -> str:
    """
    Format a duration as MM:SS.CC, or HH:MM:SS.CC from one hour upwards.

    Negative input is clamped to zero so the function is total.
    """
    duration_ms = max(0, int(duration_ms))

    minutes = (duration_ms // MINUTE_MS) % 60
    seconds = (duration_ms // SECOND_MS) % 60
    centis = (duration_ms % SECOND_MS) // 10

    if duration_ms >= HOUR_MS:
        hours = duration_ms // HOUR_MS
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{centis:02d}"

    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


UNKNOWN_DATE = "??/??/????"


def format_date(timestamp_ms: int, tz: Optional[timezone] = None) -> str:
    """
    Render a completion timestamp (epoch ms) as DD/MM/YYYY in local time.

    Timestamps outside the platform's datetime range render as UNKNOWN_DATE.
    """
    try:
        moment = datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz)
    except (ValueError, OverflowError, OSError):
        return UNKNOWN_DATE
    return moment.strftime("%d/%m/%Y")
