"""Rule-based task parser that works without any network access.

Pure apart from the ``now`` it is handed: the same text and the same
``now`` always give the same StructuredTask.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from study_planner.models import (
    DEFAULT_DURATION_MIN,
    Priority,
    StructuredTask,
    clamp_duration,
    round_half_up,
)
from study_planner.timeutils import at_due_time, default_deadline

MAX_TITLE_LEN = 50
UNTITLED = "Untitled task"

HIGH_PRIORITY_KEYWORDS = ["urgent", "asap", "critical"]
LOW_PRIORITY_KEYWORDS = ["low priority", "whenever", "flexible"]

_CLAUSE_BREAK = re.compile(r"[,.!?]")
_DURATION = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*(hour|hr|h|minute|min|m)", re.IGNORECASE)
_IN_N_DAYS = re.compile(r"in\s+([0-9]+)\s+day", re.IGNORECASE)

# checked in order, first hit wins
_RELATIVE_DAYS = [
    ("today", 0),
    ("tomorrow", 1),
    ("next week", 7),
    ("next month", 30),
]


def parse_title(text: str) -> str:
    title = _CLAUSE_BREAK.split(text)[0].strip() or text[:MAX_TITLE_LEN].strip()
    return title[:MAX_TITLE_LEN].strip() or UNTITLED


def parse_priority(lower_text: str) -> Priority:
    if any(keyword in lower_text for keyword in HIGH_PRIORITY_KEYWORDS):
        return "high"
    if any(keyword in lower_text for keyword in LOW_PRIORITY_KEYWORDS):
        return "low"
    return "medium"


def parse_duration(text: str) -> int:
    match = _DURATION.search(text)
    if match is None:
        return DEFAULT_DURATION_MIN

    value = float(match.group(1))
    unit = match.group(2).lower()
    minutes = value * 60 if unit.startswith("h") else value
    return clamp_duration(round_half_up(clamp_duration(minutes)))


def parse_deadline(text: str, now: datetime) -> datetime:
    lower_text = text.lower()
    deadline = default_deadline(now)

    for phrase, days in _RELATIVE_DAYS:
        if phrase in lower_text:
            deadline = now + timedelta(days=days)
            break
    else:
        if "in" in lower_text and "day" in lower_text:
            match = _IN_N_DAYS.search(text)
            if match:
                try:
                    deadline = now + timedelta(days=int(match.group(1)))
                except (OverflowError, ValueError):
                    # day count too large for a date, keep the default
                    pass

    return at_due_time(deadline)


def parse_task(text: str, now: Optional[datetime] = None) -> StructuredTask:
    if now is None:
        now = datetime.now()

    return StructuredTask(
        title=parse_title(text),
        duration=parse_duration(text),
        deadline=parse_deadline(text, now),
        priority=parse_priority(text.lower()),
    )
