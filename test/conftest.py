from datetime import datetime

import pytest

from study_planner.errors import RemoteUnavailable

NOW = datetime(2024, 1, 1, 10, 0)


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._response_text


class FailingProvider:
    def __init__(self, error: Exception):
        self._error = error
        self.calls = 0

    def generate(self, prompt: str) -> str:
        self.calls += 1
        raise self._error


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def failing_provider_factory():
    def _make(error: Exception = None):
        return FailingProvider(error or RemoteUnavailable("connection refused"))
    return _make


@pytest.fixture
def clock():
    return lambda: NOW
