from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.settings import Settings


class FakeGenerationClient:
    """Replays scripted outputs; an Exception entry is raised instead of returned."""

    def __init__(self, outputs):
        self.outputs = list(outputs)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate_json(self, prompt: str) -> str:
        self.prompts.append(prompt)
        # The last scripted output repeats once the script runs out.
        out = self.outputs[min(len(self.prompts), len(self.outputs)) - 1]
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def settings() -> Settings:
    return Settings(google_api_key=None, max_retries=3)


@pytest.fixture
def make_client(settings):
    def _make(*outputs, app_settings: Settings | None = None):
        fake = FakeGenerationClient(outputs)
        app = create_app(settings=app_settings or settings, generation_client=fake)
        return TestClient(app), fake

    return _make
