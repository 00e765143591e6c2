import datetime as dt
from typing import Optional
from zoneinfo import ZoneInfo

from app.config import settings

# en-US names; strftime's %A/%B follow the host locale
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

def to_display_tz(value: dt.datetime, tz: Optional[str] = None) -> dt.datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(ZoneInfo(tz or settings.DISPLAY_TIMEZONE))

def format_event_date(value: dt.datetime, tz: Optional[str] = None) -> str:
    """Long US date, e.g. ``Friday, January 17, 2025``."""
    local = to_display_tz(value, tz)
    return f"{WEEKDAYS[local.weekday()]}, {MONTHS[local.month - 1]} {local.day}, {local.year}"

def format_event_time(value: dt.datetime, tz: Optional[str] = None) -> str:
    """12-hour clock time, e.g. ``9:00 PM``."""
    local = to_display_tz(value, tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"
