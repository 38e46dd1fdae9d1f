"""
Pytest configuration and fixtures for the event location resolver tests.

Provides calendar event builders and isolated settings.
"""

import uuid
from datetime import datetime, timezone
from typing import Generator

import pytest

from src.config import get_settings
from src.integrations.base import CalendarEvent, VideoCallData
from src.services import video_providers


TEST_WEBAPP_URL = "https://app.example.com"


def build_video_call_data(**overrides) -> VideoCallData:
    """
    Build VideoCallData for a third-party provider.

    Keyword arguments override any field.
    """
    data = {
        "type": "zoom_video",
        "id": str(uuid.uuid4()),
        "password": "s3cr3t-passcode",
        "url": "https://zoom.us/j/84721903311?pwd=abc123",
    }
    data.update(overrides)
    return VideoCallData(**data)


_UNSET = object()


def build_calendar_event(video_call_data=_UNSET, **overrides) -> CalendarEvent:
    """
    Build a CalendarEvent backed by a third-party video call.

    Pass video_call_data=None for an event without conferencing data.
    """
    if video_call_data is _UNSET:
        video_call_data = build_video_call_data()

    data = {
        "uid": f"bk_{uuid.uuid4().hex[:12]}",
        "title": "30 Min Meeting between Jane Doe and John Smith",
        "description": "Quarterly sync",
        "start_time": datetime(2026, 2, 15, 10, 0, tzinfo=timezone.utc),
        "end_time": datetime(2026, 2, 15, 10, 30, tzinfo=timezone.utc),
        "location": None,
        "organizer": "jane.doe@example.com",
        "attendees": ["john.smith@example.com"],
    }
    data.update(overrides)
    return CalendarEvent(video_call_data=video_call_data, **data)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch) -> Generator[None, None, None]:
    """Point generated links at a fixed web app URL and reset the settings cache."""
    monkeypatch.setenv("WEBAPP_URL", TEST_WEBAPP_URL)
    monkeypatch.setenv("PYTHON_ENV", "development")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_provider_policies() -> Generator[None, None, None]:
    """Undo any provider policy registered by a test."""
    saved = dict(video_providers._policies)
    yield
    video_providers._policies.clear()
    video_providers._policies.update(saved)


@pytest.fixture
def daily_event() -> CalendarEvent:
    """Event hosted on the built-in video provider."""
    return build_calendar_event(
        video_call_data=build_video_call_data(
            type="daily_video",
            url="https://acme.daily.co/Xf3kQz9LmP2",
            password="daily-meeting-token",
        ),
    )


@pytest.fixture
def zoom_event() -> CalendarEvent:
    """Event hosted on a third-party video provider."""
    return build_calendar_event()


@pytest.fixture
def address_event() -> CalendarEvent:
    """In-person event without conferencing data."""
    return build_calendar_event(
        video_call_data=None,
        location="742 Evergreen Terrace, Springfield",
    )


@pytest.fixture
def make_event():
    """Factory fixture wrapping build_calendar_event."""
    return build_calendar_event


@pytest.fixture
def make_video_call_data():
    """Factory fixture wrapping build_video_call_data."""
    return build_video_call_data
