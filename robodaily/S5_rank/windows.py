"""Time window boundaries, measured back from the evaluation time."""

from datetime import datetime, timedelta, timezone

from ..models import TimeWindow

_ROLLING_DAYS = {
    TimeWindow.WEEK: 7,
    TimeWindow.MONTH: 30,
}


def window_start(window: TimeWindow, now: datetime) -> datetime | None:
    """
    Earliest timestamp included by a window (inclusive), or None if unbounded.

    - 7d / 30d: rolling N * 24h
    - 1y: midnight of the same month/day one calendar year earlier
      (Feb 29 -> Feb 28)
    - 5y: January 1st of (current year - 5)
    """
    if window in _ROLLING_DAYS:
        return now - timedelta(days=_ROLLING_DAYS[window])
    if window == TimeWindow.YEAR:
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        try:
            return midnight.replace(year=now.year - 1)
        except ValueError:
            return midnight.replace(year=now.year - 1, day=28)
    if window == TimeWindow.FIVE_YEARS:
        return datetime(now.year - 5, 1, 1, tzinfo=now.tzinfo or timezone.utc)
    return None
