import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from api.dependencies import get_task_extractor, get_task_store
from extraction.task_extractor import TaskExtractor
from storage.task_store import TaskStore
from study_planner.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from study_planner.models import StructuredTask, Task, TaskPatch
from study_planner.timeutils import parse_iso_day

router = APIRouter()
logger = logging.getLogger(__name__)


class ParseTaskIn(BaseModel):
    text: str


def _record(endpoint: str, outcome: str, started: float) -> None:
    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=outcome).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - started)
    except Exception:
        pass


@router.post("/tasks/parse", response_model=StructuredTask)
def parse_task(
    payload: ParseTaskIn,
    extractor: TaskExtractor = Depends(get_task_extractor),
) -> StructuredTask:
    """Turn a free-text sentence into a task. Always answers with a valid task."""
    start = time.time()
    task = extractor.extract(payload.text)
    _record("/tasks/parse", "ok", start)
    return task


@router.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: StructuredTask,
    store: TaskStore = Depends(get_task_store),
) -> Task:
    start = time.time()
    stored = store.save(payload)
    if stored is None:
        _record("/tasks", "error", start)
        raise HTTPException(status_code=500, detail="Task could not be saved")
    logger.info(f"Created task {stored.id}: {stored.title}")
    _record("/tasks", "created", start)
    return stored


@router.get("/tasks", response_model=List[Task])
def list_tasks(
    date: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
) -> List[Task]:
    """All tasks by deadline, or only those due on ``date`` (YYYY-MM-DD)."""
    if date is None:
        return store.list()
    try:
        day = parse_iso_day(date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")
    return store.list_for_date(day)


@router.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Task:
    task = store.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.patch("/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    patch: TaskPatch,
    store: TaskStore = Depends(get_task_store),
) -> Task:
    updated = store.update(task_id, patch)
    if updated is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Response:
    if not store.delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
