from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> str:
        """
        Must return the model output as TEXT (JSON is located and validated in LLMClient).
        Failures are reported as PlannerError subclasses, never as transport exceptions.
        """
        raise NotImplementedError
