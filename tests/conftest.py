from datetime import datetime
from typing import Any, List

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from config.settings import get_settings


class RecordingChatModel(FakeListChatModel):
    """Fake chat model that keeps the messages of every call."""

    seen: List[Any] = []

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self.seen.append(list(messages))
        return super()._call(messages, stop=stop, run_manager=run_manager, **kwargs)


@pytest.fixture
def now():
    return datetime(2025, 8, 1, 12, 0)


@pytest.fixture
def sample_bundle():
    return {
        "userProfile": {
            "name": "Sarah Johnson",
            "email": "sarah.johnson@email.com",
            "phone": "+1-555-0123",
            "displayName": "Sarah J.",
        },
        "jobs": [
            {
                "clientName": "Fashion Forward Magazine",
                "type": "Editorial",
                "date": "2025-08-15",
                "time": "09:00",
                "location": "New York, NY",
                "rate": 2500,
                "currency": "USD",
                "status": "Confirmed",
                "paymentStatus": "Pending",
                "notes": "Bring black heels and minimal jewelry",
            },
            {
                "clientName": "Luxury Brand Co",
                "type": "Commercial",
                "date": "2025-07-25",
                "location": "Los Angeles, CA",
                "rate": 5000,
                "status": "Completed",
                "paymentStatus": "Paid",
            },
            {
                "clientName": "Designer Boutique",
                "type": "Runway",
                "date": "2025-09-10",
                "time": "18:00",
                "location": "Milan, Italy",
                "rate": 3000,
                "currency": "EUR",
            },
        ],
        "events": [
            {
                "type": "casting",
                "clientName": "Elite Modeling Agency",
                "date": "2025-08-05",
                "startTime": "10:00",
                "location": "Manhattan, NY",
                "dayRate": 500,
                "currency": "USD",
                "notes": "Bring portfolio and comp cards",
            },
        ],
        "aiJobs": [{"clientName": "Virtual Studio", "date": "2025-08-20", "rate": 800}],
        "agencies": [
            {"name": "Elite Model Management", "city": "New York", "country": "USA", "commissionRate": 20},
        ],
        "agents": [{"name": "Jessica Martinez", "email": "jessica@elitemodels.com", "city": "New York"}],
        "meetings": [{"clientName": "Vogue", "date": "2025-08-10", "time": "15:00", "location": "NYC"}],
        "onStays": [
            {"locationName": "Hotel Bristol", "checkInDate": "2025-09-09", "checkOutDate": "2025-09-12",
             "cost": 450, "currency": "EUR"},
        ],
        "shootings": [{"clientName": "Nike", "date": "2025-08-22", "location": "Studio 5", "rate": 1500}],
    }


@pytest.fixture
def settings_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def recording_model_factory():
    def factory(*responses: str) -> RecordingChatModel:
        return RecordingChatModel(responses=list(responses), seen=[])

    return factory
