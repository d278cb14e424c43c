from typing import Any, List, Mapping

import pytest
from fastapi.testclient import TestClient

from formulator.api.endpoints import create_app
from formulator.config.settings import Settings
from formulator.notifications.dispatcher import DispatchResult, NotificationDispatcher


class RecordingDispatcher(NotificationDispatcher):
    """Dispatcher that records submissions instead of posting them."""

    def __init__(self):
        super().__init__()
        self.calls: List[dict] = []

    async def dispatch(self, fields: Mapping[str, Any]) -> List[DispatchResult]:
        self.calls.append(dict(fields))
        return []


@pytest.fixture
def settings() -> Settings:
    """Settings matching a typical contact form."""
    return Settings(
        honeypot_field="no-spam-pls",
        required_fields=("email", "message"),
        email_fields=("email",),
    )


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def client(settings: Settings, dispatcher: RecordingDispatcher) -> TestClient:
    """Test client for an app built from the settings fixture."""
    return TestClient(create_app(settings, dispatcher))
