"""Date and time helpers.

Local times are naive datetimes; times in a fixed zone carry their tzinfo.
"""

from datetime import datetime, timedelta, timezone, tzinfo

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

LOCATION = timezone(timedelta(hours=8), "CST")

UNIT_YEAR = "岁"
UNIT_MONTH = "月"
UNIT_DAY = "天"


def date(year: int, month: int, day: int, tz: tzinfo | None = None) -> datetime:
    """Return midnight of the given day in tz (local when tz is None)."""
    return datetime(year, month, day, tzinfo=tz)


def date_local(year: int, month: int, day: int) -> datetime:
    """Return local midnight of the given day."""
    return date(year, month, day)


def _is_zero(t: datetime | None) -> bool:
    return t is None or t.replace(tzinfo=None) == datetime.min


def is_expired(deadline: datetime | None, now: datetime) -> bool:
    """Report whether deadline is not after now; a zero deadline never expires."""
    if _is_zero(deadline):
        return False
    return deadline <= now


def day_zero(t: datetime) -> datetime:
    """Return midnight of t's day, keeping t's zone."""
    return t.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)


def month_first(t: datetime) -> datetime:
    """Return midnight of the first day of t's month."""
    return day_zero(t).replace(day=1)


def year_first(t: datetime) -> datetime:
    """Return midnight of January 1st of t's year."""
    return day_zero(t).replace(month=1, day=1)


def today_zero() -> datetime:
    """Return local midnight of today."""
    return day_zero(datetime.now())


def this_month_first() -> datetime:
    """Return local midnight of the first day of this month."""
    return month_first(datetime.now())


def this_year_first() -> datetime:
    """Return local midnight of January 1st of this year."""
    return year_first(datetime.now())


def parse_time(text: str, *layouts: str) -> datetime:
    """Parse text with each strptime layout in turn, defaulting to DATE_TIME_FORMAT.

    Raises the last ValueError when no layout matches.
    """
    error: ValueError | None = None
    for layout in layouts or (DATE_TIME_FORMAT,):
        try:
            return datetime.strptime(text, layout)
        except ValueError as exc:
            error = exc
    assert error is not None
    raise error


def age_by_birth(birthday: datetime, now: datetime | None = None) -> tuple[int, str]:
    """Return (age, unit) between birthday and now (current time by default).

    The unit is years when at least one full year has passed, else months,
    else days. A birthday after now gives (0, "").
    """
    if now is None:
        now = datetime.now(birthday.tzinfo) if birthday.tzinfo else datetime.now()

    elapsed = now - birthday
    if elapsed < timedelta(0):
        return 0, ""

    age, unit = 0, ""
    if elapsed == timedelta(0):
        age, unit = 1, UNIT_DAY

    shifted = datetime.min + elapsed
    years, months, days = shifted.year - 1, shifted.month - 1, shifted.day - 1

    if years > 0:
        age, unit = years, UNIT_YEAR
        if months == 0 and days == 0 and (
            now.month != birthday.month or now.day != birthday.day
        ):
            age -= 1
    elif months > 0:
        age, unit = months, UNIT_MONTH
    elif days > 0:
        age, unit = days, UNIT_DAY

    return age, unit