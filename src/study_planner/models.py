from __future__ import annotations

import math
from datetime import datetime
from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from study_planner.timeutils import minutes_between, parse_hhmm

Priority = Literal["low", "medium", "high"]
TaskStatus = Literal["pending", "in_progress", "completed"]

PRIORITIES = ("low", "medium", "high")
PRIORITY_RANK = {"low": 0, "medium": 1, "high": 2}

MIN_DURATION_MIN = 15
MAX_DURATION_MIN = 480
DEFAULT_DURATION_MIN = 60
DEFAULT_PRIORITY: Priority = "medium"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_duration(minutes: int) -> int:
    return max(MIN_DURATION_MIN, min(MAX_DURATION_MIN, minutes))


class StructuredTask(BaseModel):
    """Normalized result of every extraction path.

    Instances are frozen: an extraction call builds a fresh one and never
    touches it again.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    duration: int = Field(DEFAULT_DURATION_MIN, ge=MIN_DURATION_MIN, le=MAX_DURATION_MIN)
    deadline: datetime
    priority: Priority = DEFAULT_PRIORITY
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2


class Task(StructuredTask):
    # Stored form of a StructuredTask
    id: str
    status: TaskStatus = "pending"
    created_at: datetime
    updated_at: datetime


class TaskPatch(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, ge=MIN_DURATION_MIN, le=MAX_DURATION_MIN)
    deadline: Optional[datetime] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2


class ScheduleItem(BaseModel):
    """One block of a day plan, either a study session or a break."""

    model_config = ConfigDict(populate_by_name=True)

    start: str
    end: str
    task: Optional[str] = None
    task_id: Optional[str] = Field(None, alias="taskId")
    is_break: bool = Field(False, alias="break")

    @field_validator("start", "end")
    @classmethod
    def valid_clock_time(cls, v: str) -> str:
        parse_hhmm(v)
        return v

    @field_validator("task_id", mode="before")
    @classmethod
    def task_id_as_text(cls, v):
        # models sometimes echo numeric ids
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="after")
    def end_not_before_start(self) -> "ScheduleItem":
        if minutes_between(self.start, self.end) < 0:
            raise ValueError(f"block ends before it starts: {self.start}-{self.end}")
        return self


class StudyPlan(BaseModel):
    date: str
    schedule: List[ScheduleItem] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def iso_date(cls, v: str) -> str:
        datetime.strptime(v, "%Y-%m-%d")
        return v
