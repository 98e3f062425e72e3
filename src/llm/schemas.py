from __future__ import annotations
import math
from datetime import datetime
from typing import Any, Optional, List

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from study_planner.models import (
    DEFAULT_DURATION_MIN,
    DEFAULT_PRIORITY,
    PRIORITIES,
    Priority,
    ScheduleItem,
    clamp_duration,
    round_half_up,
)

_DATETIME = TypeAdapter(datetime)


class ParsedTaskPayload(BaseModel):
    """Model output for a single task.

    Only ``title`` can make validation fail; every other field is coerced
    to a usable value or left empty for the caller to default.
    """

    title: str = Field(..., min_length=1)
    duration: int = DEFAULT_DURATION_MIN
    deadline: Optional[datetime] = None
    priority: Priority = DEFAULT_PRIORITY
    description: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("duration", mode="before")
    @classmethod
    def clamp_minutes(cls, v: Any) -> int:
        if isinstance(v, bool):
            return DEFAULT_DURATION_MIN
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                return DEFAULT_DURATION_MIN
        if isinstance(v, int):
            return clamp_duration(v)
        if not isinstance(v, float) or not math.isfinite(v):
            return DEFAULT_DURATION_MIN
        return clamp_duration(round_half_up(clamp_duration(v)))

    @field_validator("deadline", mode="before")
    @classmethod
    def parseable_deadline(cls, v: Any) -> Optional[datetime]:
        if v is None or v == "":
            return None
        try:
            return _DATETIME.validate_python(v)
        except ValidationError:
            return None

    @field_validator("priority", mode="before")
    @classmethod
    def known_priority(cls, v: Any) -> str:
        return v if v in PRIORITIES else DEFAULT_PRIORITY

    @field_validator("description", mode="before")
    @classmethod
    def text_only(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


class StudyPlanPayload(BaseModel):
    date: Optional[str] = None
    schedule: List[ScheduleItem]

    @field_validator("date", mode="before")
    @classmethod
    def iso_date_or_none(cls, v: Any) -> Optional[str]:
        if not isinstance(v, str):
            return None
        try:
            datetime.strptime(v, "%Y-%m-%d")
        except ValueError:
            return None
        return v
