"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat warning-capture or dependency-override boilerplate.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_tuning
from api.main import app
from core.music_theory.config import DEFAULT_TUNING

# ---------------------------------------------------------------------------
# Warning capture
# ---------------------------------------------------------------------------


class WarningSink:
    """Collects messages passed to an engine ``on_warning`` callback."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)

    def contains(self, fragment: str) -> bool:
        return any(fragment in m for m in self.messages)


@pytest.fixture()
def warnings_sink() -> WarningSink:
    """Fresh warning collector, passed as ``on_warning=warnings_sink``."""
    return WarningSink()


# ---------------------------------------------------------------------------
# FastAPI test client fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client():
    """FastAPI ``TestClient`` with the tuning pinned to A4 = 440 Hz.

    The override keeps tests independent of ``MUSIC_THEORY_REFERENCE_HZ``
    in the developer's environment or ``.env`` file.
    """
    app.dependency_overrides[get_tuning] = lambda: DEFAULT_TUNING
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
