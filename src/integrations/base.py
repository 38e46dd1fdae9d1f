"""
Calendar event base types.

Defines the normalized event shape handed to the location resolver by
upstream integrations (Google Calendar, booking flow, HTTP API), and the
tagged location union derived from it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union


# Sentinel marking a location string as an integration display name
INTEGRATION_PREFIX = "integrations:"


@dataclass
class VideoCallData:
    """
    Conferencing details stamped onto an event by a video integration.

    `type` is the provider identifier (e.g. "daily_video", "zoom_video").
    `url` is the provider's own join URL, which may be organizer-only.
    `password` is meaningful only for providers that use one.
    """

    type: str
    url: str
    password: str = ""
    id: str = ""


@dataclass
class CalendarEvent:
    """
    Normalized event representation across calendar providers.

    This is the common format used by the service layer, mapped from
    provider-specific formats by adapters.
    """

    title: str
    start_time: datetime
    end_time: datetime
    uid: Optional[str] = None
    calendar_id: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    video_call_data: Optional[VideoCallData] = None
    organizer: Optional[str] = None
    attendees: list[str] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def duration_minutes(self) -> int:
        """Calculate event duration in minutes."""
        delta = self.end_time - self.start_time
        return int(delta.total_seconds() / 60)

    @property
    def has_video_call(self) -> bool:
        return self.video_call_data is not None


@dataclass(frozen=True)
class AddressLocation:
    """Free-text location such as a street address. `address` may be None."""

    address: Optional[str]


@dataclass(frozen=True)
class IntegrationLocation:
    """Location given as an integration's display name (`integrations:<name>`)."""

    provider_name: str


@dataclass(frozen=True)
class VideoCallLocation:
    """Location backed by conferencing data."""

    video_call_data: VideoCallData


EventLocation = Union[AddressLocation, IntegrationLocation, VideoCallLocation]


def parse_event_location(event: CalendarEvent) -> EventLocation:
    """
    Classify where an event happens.

    Video-call data always wins over the raw location string; otherwise the
    integration sentinel is stripped, and anything else is kept verbatim.

    Args:
        event: Event to classify

    Returns:
        One of AddressLocation, IntegrationLocation or VideoCallLocation
    """
    if event.video_call_data is not None:
        return VideoCallLocation(video_call_data=event.video_call_data)

    location = event.location
    if location is not None and location.startswith(INTEGRATION_PREFIX):
        return IntegrationLocation(provider_name=location[len(INTEGRATION_PREFIX):])

    return AddressLocation(address=location)
