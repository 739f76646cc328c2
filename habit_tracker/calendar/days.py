"""Day identity and weekday helpers."""

from datetime import date, datetime
from typing import Callable, Union

from habit_tracker.errors import InvalidDate

Clock = Callable[[], datetime]

WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


def day_identity(instant: Union[datetime, date]) -> datetime:
    """
    Truncate an instant to midnight.

    Timezone info is dropped without conversion, so every instant on the
    same calendar date maps to the same key.

    Args:
        instant: Datetime or date to normalize

    Returns:
        Naive datetime at 00:00:00
    """
    if not isinstance(instant, datetime):
        return datetime(instant.year, instant.month, instant.day)

    return instant.replace(
        hour=0, minute=0, second=0, microsecond=0, tzinfo=None
    )


def weekday_of(day: Union[datetime, date]) -> int:
    """
    Get day of week where Sunday=0, Saturday=6.

    Args:
        day: Date or datetime to check

    Returns:
        Day of week (0-6)
    """
    # Python weekday: Monday=0, Sunday=6
    # Convert to: Sunday=0, Saturday=6
    return (day.weekday() + 1) % 7


def parse_date(raw: str) -> datetime:
    """
    Parse an ISO-8601 date or datetime string into a day identity.

    Raises:
        InvalidDate: If the string is not a valid ISO-8601 value
    """
    try:
        parsed = datetime.fromisoformat((raw or "").strip())
    except ValueError:
        raise InvalidDate(f"Invalid date: {raw!r}") from None

    return day_identity(parsed)


def today(clock: Clock = datetime.now) -> datetime:
    """Day identity of the clock's current instant."""
    return day_identity(clock())
