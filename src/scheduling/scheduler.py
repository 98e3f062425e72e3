from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, NamedTuple, Optional, Sequence

from pydantic import ValidationError

from llm.llm_client import LLMClient
from llm.prompts import study_plan_prompt
from llm.schemas import StudyPlanPayload
from study_planner.errors import MalformedResponse
from study_planner.models import PRIORITY_RANK, ScheduleItem, StudyPlan, Task
from study_planner.resolution import TieredResolver
from study_planner.timeutils import as_local_naive

logger = logging.getLogger(__name__)


class PlanRequest(NamedTuple):
    tasks: Sequence[Task]
    day: date


def default_schedule() -> List[ScheduleItem]:
    return [
        ScheduleItem(start="08:00", end="09:00", task="Morning Review"),
        ScheduleItem(start="09:00", end="09:15", is_break=True),
        ScheduleItem(start="09:15", end="10:15", task="Main Task"),
        ScheduleItem(start="10:15", end="10:30", is_break=True),
        ScheduleItem(start="10:30", end="11:30", task="Secondary Task"),
    ]


def order_for_prompt(tasks: Sequence[Task]) -> List[Task]:
    """Highest priority first, then earliest deadline."""
    return sorted(tasks, key=lambda t: (-PRIORITY_RANK[t.priority], as_local_naive(t.deadline)))


class RemotePlanStrategy:
    name = "remote"

    def __init__(self, llm_client: LLMClient):
        self.llm = llm_client

    def attempt(self, request: PlanRequest) -> StudyPlan:
        day = request.day.isoformat()
        raw = self.llm.complete_json(study_plan_prompt(order_for_prompt(request.tasks), day))

        try:
            payload = StudyPlanPayload.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponse(f"model schedule rejected: {e.error_count()} error(s)") from e

        if payload.date and payload.date != day:
            logger.info(f"Model dated the plan {payload.date}, keeping requested day {day}")
        return StudyPlan(date=day, schedule=payload.schedule)


class StaticPlanStrategy:
    name = "static"

    def attempt(self, request: PlanRequest) -> StudyPlan:
        return StudyPlan(date=request.day.isoformat(), schedule=default_schedule())


class Scheduler:
    """Builds a day plan for a set of tasks. ``schedule`` never raises."""

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        today: Callable[[], date] = date.today,
    ):
        self.today = today
        self.fallback = StaticPlanStrategy()
        strategies = []
        if llm_client is not None:
            strategies.append(RemotePlanStrategy(llm_client))
        strategies.append(self.fallback)
        self.resolver = TieredResolver("study_plan", strategies)

    def schedule(self, tasks: Sequence[Task], day: Optional[date] = None) -> StudyPlan:
        request = PlanRequest(tasks=list(tasks), day=day or self.today())

        if not request.tasks:
            logger.info("No tasks to schedule, using the default plan")
            return self.fallback.attempt(request)

        plan = self.resolver.resolve(request)
        logger.info(f"Study plan for {plan.date} has {len(plan.schedule)} blocks")
        return plan
