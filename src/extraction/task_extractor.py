from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from extraction.heuristic_parser import parse_task
from llm.llm_client import LLMClient
from llm.prompts import task_parse_prompt
from llm.schemas import ParsedTaskPayload
from study_planner.errors import MalformedResponse
from study_planner.models import StructuredTask
from study_planner.resolution import TieredResolver
from study_planner.timeutils import default_deadline

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class RemoteTaskStrategy:
    """Ask the model for a JSON task and normalize whatever comes back."""

    name = "remote"

    def __init__(self, llm_client: LLMClient, clock: Clock = datetime.now):
        self.llm = llm_client
        self.clock = clock

    def attempt(self, text: str) -> StructuredTask:
        raw = self.llm.complete_json(task_parse_prompt(text))

        try:
            payload = ParsedTaskPayload.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponse(f"model output has no usable title: {e.error_count()} error(s)") from e

        return StructuredTask(
            title=payload.title,
            duration=payload.duration,
            deadline=payload.deadline or default_deadline(self.clock()),
            priority=payload.priority,
            description=payload.description,
        )


class LocalTaskStrategy:
    name = "local"

    def __init__(self, clock: Clock = datetime.now):
        self.clock = clock

    def attempt(self, text: str) -> StructuredTask:
        return parse_task(text, now=self.clock())


class TaskExtractor:
    """Turns free text into a StructuredTask. ``extract`` never raises."""

    def __init__(self, llm_client: Optional[LLMClient] = None, clock: Clock = datetime.now):
        strategies = []
        if llm_client is not None:
            strategies.append(RemoteTaskStrategy(llm_client, clock=clock))
        strategies.append(LocalTaskStrategy(clock=clock))
        self.resolver = TieredResolver("task_extraction", strategies)

    def extract(self, text: str) -> StructuredTask:
        logger.info(f"Extracting task from: {text[:50]!r}")
        task = self.resolver.resolve(text)
        logger.debug(f"Extracted task: {task.model_dump()}")
        return task
