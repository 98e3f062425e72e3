from __future__ import annotations

from datetime import date, datetime, time, timedelta

DEFAULT_DUE_TIME = time(18, 0)


def parse_hhmm(s: str) -> time:
    """Convert HH:MM string to time. Raises ValueError on anything else."""
    if not isinstance(s, str) or len(s.split(":")) != 2:
        raise ValueError(f"expected HH:MM, got {s!r}")
    h, m = map(int, s.split(":"))
    return time(h, m)


def minutes_between(start: str, end: str) -> int:
    """Signed span in minutes between two HH:MM clock times of the same day."""
    s = parse_hhmm(start)
    e = parse_hhmm(end)
    return (e.hour * 60 + e.minute) - (s.hour * 60 + s.minute)


def at_due_time(moment: datetime) -> datetime:
    """Pin a moment to 18:00:00.000 on its own calendar day."""
    return moment.replace(
        hour=DEFAULT_DUE_TIME.hour, minute=DEFAULT_DUE_TIME.minute, second=0, microsecond=0
    )


def default_deadline(now: datetime) -> datetime:
    return now + timedelta(days=1)


def parse_iso_day(s: str) -> date:
    return datetime.strptime(s, "%Y-%m-%d").date()


def as_local_naive(moment: datetime) -> datetime:
    """Comparable form of a deadline: aware values are shifted to local time."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)
