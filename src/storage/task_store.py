from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from study_planner.models import StructuredTask, Task, TaskPatch
from study_planner.timeutils import as_local_naive

logger = logging.getLogger(__name__)


class TaskStore:
    """Tasks kept in a single JSON file.

    Reads never fail: a missing or corrupted file is an empty store, and
    records that no longer validate are skipped. Writes keep those records
    as they are and refuse to touch a file that cannot be read at all.
    Failures are reported as ``None``/``False`` instead of raising.
    """

    def __init__(self, path: str = "data/tasks.json"):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Tuple[List[Task], List[Any]]:
        """Valid tasks plus the raw records that failed validation.

        Raises ValueError when the file as a whole is not a JSON list.
        """
        if not self.path.exists():
            return [], []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError("task store is not a JSON list")

        tasks: List[Task] = []
        invalid: List[Any] = []
        for item in data:
            try:
                tasks.append(Task.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid task record in {self.path}: {e.error_count()} error(s)")
                invalid.append(item)
        return tasks, invalid

    def _read(self) -> List[Task]:
        try:
            return self._load()[0]
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable task store {self.path}: {e}")
            return []

    def _write(self, tasks: List[Task], invalid: List[Any]) -> None:
        # invalid records are written back untouched
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([t.model_dump(mode="json") for t in tasks] + invalid, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    def list(self) -> List[Task]:
        """All tasks, earliest deadline first."""
        with self._lock:
            tasks = self._read()
        return sorted(tasks, key=lambda t: as_local_naive(t.deadline))

    def list_for_date(self, day: date) -> List[Task]:
        return [t for t in self.list() if as_local_naive(t.deadline).date() == day]

    def get(self, task_id: str) -> Optional[Task]:
        with self._lock:
            return next((t for t in self._read() if t.id == task_id), None)

    def _load_for_write(self) -> Optional[Tuple[List[Task], List[Any]]]:
        try:
            return self._load()
        except (OSError, ValueError) as e:
            logger.error(f"Refusing to write over unreadable task store {self.path}: {e}")
            return None

    def save(self, task: StructuredTask) -> Optional[Task]:
        now = datetime.now()
        stored = Task(
            **task.model_dump(include=set(StructuredTask.model_fields)),
            id=uuid.uuid4().hex,
            status="pending",
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            loaded = self._load_for_write()
            if loaded is None:
                return None
            tasks, invalid = loaded
            tasks.append(stored)
            try:
                self._write(tasks, invalid)
            except OSError as e:
                logger.error(f"Error adding task: {e}")
                return None
        return stored

    def update(self, task_id: str, patch: TaskPatch) -> Optional[Task]:
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            loaded = self._load_for_write()
            if loaded is None:
                return None
            tasks, invalid = loaded
            for i, current in enumerate(tasks):
                if current.id != task_id:
                    continue
                try:
                    updated = Task.model_validate(
                        {**current.model_dump(), **changes, "updated_at": datetime.now()}
                    )
                except ValidationError as e:
                    logger.error(f"Error updating task {task_id}: {e}")
                    return None
                tasks[i] = updated
                try:
                    self._write(tasks, invalid)
                except OSError as e:
                    logger.error(f"Error updating task {task_id}: {e}")
                    return None
                return updated
        return None

    def delete(self, task_id: str) -> bool:
        with self._lock:
            loaded = self._load_for_write()
            if loaded is None:
                return False
            tasks, invalid = loaded
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                return False
            try:
                self._write(remaining, invalid)
            except OSError as e:
                logger.error(f"Error deleting task {task_id}: {e}")
                return False
        return True
