from datetime import date, datetime, time, timedelta, timezone


def as_date(value) -> date:
    """Return the calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def monday_of(value) -> date:
    # Monday = 0, Sunday = 6
    d = as_date(value)
    return d - timedelta(days=d.weekday())


def start_of_day(value) -> datetime:
    """Midnight at the start of the given day (naive)."""
    return datetime.combine(as_date(value), time.min)


def end_of_week(week_start: date) -> datetime:
    """Last second (23:59:59) of the sixth day after `week_start`."""
    return datetime.combine(week_start + timedelta(days=6), time(23, 59, 59))


def is_same_day(a, b) -> bool:
    if a is None or b is None:
        return False
    return as_date(a) == as_date(b)


def format_range(start: date, end: date) -> str:
    """Format a Monday-Sunday range without repeating the month/year.

    Examples:
      - 'Jan 5 - 11, 2026'
      - 'Jan 26 - Feb 1, 2026'
      - 'Dec 29, 2025 - Jan 4, 2026'
    """
    if start.year != end.year:
        return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
    if start.month != end.month:
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    return f"{start:%b} {start.day} - {end.day}, {end.year}"


def format_day(value) -> tuple[str, str]:
    """Return ('Mon', '5') style weekday/day labels."""
    d = as_date(value)
    return f"{d:%a}", str(d.day)


def hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def format_clock_time(dt: datetime) -> str:
    """Format a datetime as 'h:mm AM/PM' without a leading zero."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except ZoneInfoNotFoundError:
            return dt.astimezone()
    return dt.astimezone()
