"""League-week bucketing relative to the season start date."""

from __future__ import annotations

from datetime import date, datetime, timedelta


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValueError(f"date '{value}' is not in YYYY-MM-DD form") from None


def week_number(value: date | datetime | str, league_start: date | datetime | str) -> int:
    """Return the 1-based league week containing ``value``.

    Works on calendar days: the start date opens week 1 and every seventh day
    after it opens the next week. Dates before the start clamp to week 1.
    """

    days = (_as_date(value) - _as_date(league_start)).days
    return max(1, days // 7 + 1)


def current_week(league_start: date | datetime | str, today: date | None = None) -> int:
    return week_number(today or date.today(), league_start)


def week_bounds(week: int, league_start: date | datetime | str) -> tuple[date, date]:
    """First and last calendar day of ``week``."""

    if week < 1:
        raise ValueError("week must be at least 1")
    first = _as_date(league_start) + timedelta(days=7 * (week - 1))
    return first, first + timedelta(days=6)
