from __future__ import annotations
import json
import re
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    def generate(self, prompt: str) -> str:
        """
        Returns dummy JSON responses based on the prompt content.
        """
        if "Parse this task description" in prompt:
            quoted = re.search(r'^"(.*)"$', prompt, re.MULTILINE)
            text = quoted.group(1) if quoted else ""
            lower_text = text.lower()
            priority = "medium"
            if "exam" in lower_text or "urgent" in lower_text:
                priority = "high"
            return json.dumps({
                "title": text[:50].strip() or "Study session",
                "duration": 60,
                "deadline": None,
                "priority": priority,
                "description": "Parsed offline by the mock provider",
            })

        if "Create an optimized study schedule" in prompt:
            first_task = re.search(r'^- "(.*)" \(', prompt, re.MULTILINE)
            task_id = re.search(r"id: ([^)\s]+)\)", prompt)
            return json.dumps({
                "schedule": [
                    {
                        "start": "08:00",
                        "end": "09:00",
                        "task": first_task.group(1) if first_task else "Study",
                        "taskId": task_id.group(1) if task_id else None,
                    },
                    {"start": "09:00", "end": "09:15", "break": True},
                ]
            })

        # Default fallback
        return "{}"
