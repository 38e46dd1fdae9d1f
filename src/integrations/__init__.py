"""
External service integrations for the event location resolver.

Provides the normalized event model shared by calendar providers.
"""

from src.integrations.base import (
    AddressLocation,
    CalendarEvent,
    EventLocation,
    IntegrationLocation,
    VideoCallData,
    VideoCallLocation,
    parse_event_location,
)

__all__ = [
    "AddressLocation",
    "CalendarEvent",
    "EventLocation",
    "IntegrationLocation",
    "VideoCallData",
    "VideoCallLocation",
    "parse_event_location",
]
