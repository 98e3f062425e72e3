import logging
import time
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_plan_store, get_scheduler, get_task_store
from scheduling.scheduler import Scheduler
from storage.plan_store import PlanStore
from storage.task_store import TaskStore
from study_planner.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from study_planner.models import StudyPlan
from study_planner.timeutils import parse_iso_day

router = APIRouter()
logger = logging.getLogger(__name__)


class PlanIn(BaseModel):
    date: Optional[str] = None  # YYYY-MM-DD, defaults to today


@router.post("/plans", response_model=StudyPlan)
def generate_plan(
    payload: PlanIn,
    scheduler: Scheduler = Depends(get_scheduler),
    task_store: TaskStore = Depends(get_task_store),
    plan_store: PlanStore = Depends(get_plan_store),
) -> StudyPlan:
    """
    Generate and store the study plan for a day.
    Uses the tasks due that day, or every stored task when nothing is due.
    """
    start = time.time()
    try:
        day = parse_iso_day(payload.date) if payload.date else date_type.today()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    tasks = task_store.list_for_date(day) or task_store.list()
    plan = scheduler.schedule(tasks, day=day)

    if plan_store.save(plan) is None:
        logger.warning(f"Study plan for {plan.date} was generated but not stored")

    try:
        REQUESTS_TOTAL.labels(endpoint="/plans", status="ok").inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint="/plans").observe(time.time() - start)
    except Exception:
        pass

    return plan


@router.get("/plans/{date}", response_model=StudyPlan)
def get_plan(date: str, plan_store: PlanStore = Depends(get_plan_store)) -> StudyPlan:
    """Get the stored plan for a specific date (YYYY-MM-DD)."""
    plan = plan_store.get(date)
    if plan is None:
        raise HTTPException(status_code=404, detail="No study plan for this date")
    return plan
