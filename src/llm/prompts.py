from __future__ import annotations

from typing import Iterable

from study_planner.models import Task

TASK_PARSE_PROMPT = """Parse this task description and return ONLY valid JSON (no markdown, no extra text):
"{text}"

Return JSON with this exact structure:
{{
  "title": "subject/topic (string)",
  "duration": number in minutes,
  "deadline": "ISO 8601 datetime string",
  "priority": "low|medium|high",
  "description": "optional detailed description"
}}

Rules:
- If no time is mentioned, default to tomorrow at 6 PM
- If no duration is mentioned, default to 60 minutes
- Default priority is "medium"
- Duration must be between 15 and 480 minutes
- Return ONLY the JSON object, nothing else"""

STUDY_PLAN_PROMPT = """Create an optimized study schedule for {day}. Return ONLY valid JSON (no markdown, no extra text):

Tasks to schedule:
{task_lines}

Return JSON with this exact structure:
{{
  "date": "YYYY-MM-DD",
  "schedule": [
    {{ "start": "HH:MM", "end": "HH:MM", "task": "task name", "taskId": "id" }},
    {{ "start": "HH:MM", "end": "HH:MM", "break": true }}
  ]
}}

Rules:
- Schedule from 08:00 to 22:00
- Max 2 hours per study session
- Include 10-15 minute breaks between sessions
- Prioritize high priority tasks and urgent deadlines
- Schedule heavier tasks earlier in the day
- Return ONLY the JSON object, nothing else"""


def task_parse_prompt(text: str) -> str:
    return TASK_PARSE_PROMPT.format(text=text)


def study_plan_prompt(tasks: Iterable[Task], day: str) -> str:
    task_lines = "\n".join(
        f'- "{t.title}" ({t.duration} min, priority: {t.priority}, '
        f"deadline: {t.deadline.isoformat()}, id: {t.id})"
        for t in tasks
    )
    return STUDY_PLAN_PROMPT.format(day=day, task_lines=task_lines)
