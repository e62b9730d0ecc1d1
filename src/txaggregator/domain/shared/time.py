"""Clock helpers. Every timestamp in the system is UTC."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def today_utc() -> date:
    """Calendar date of ``utc_now``; transaction dates are checked against it."""
    return utc_now().date()


def as_utc(dt: datetime) -> datetime:
    """
    Return ``dt`` as an aware UTC datetime.

    SQLite hands back naive values for ``DateTime(timezone=True)`` columns;
    those are taken to be UTC already. Aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def years_before(day: date, years: int) -> date:
    """Return the same calendar day ``years`` earlier (Feb 29 -> Feb 28)."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)
