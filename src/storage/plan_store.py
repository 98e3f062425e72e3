from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from study_planner.models import StudyPlan

logger = logging.getLogger(__name__)


class PlanStore:
    """Study plans keyed by ISO date, one plan per day."""

    def __init__(self, path: str = "data/plans.json"):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, dict]:
        try:
            if not self.path.exists():
                return {}
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable plan store {self.path}: {e}")
            return {}

    def get(self, day: str) -> Optional[StudyPlan]:
        with self._lock:
            raw = self._read().get(day)
        if raw is None:
            return None
        try:
            return StudyPlan.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored plan for {day} is invalid: {e}")
            return None

    def save(self, plan: StudyPlan) -> Optional[StudyPlan]:
        with self._lock:
            plans = self._read()
            plans[plan.date] = plan.model_dump(mode="json", by_alias=True)
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(
                    json.dumps(plans, ensure_ascii=False, indent=2),
                    encoding="utf-8",
                )
            except OSError as e:
                logger.error(f"Error saving study plan: {e}")
                return None
        return plan
