"""
Event location resolution.

Maps a CalendarEvent to the location text, join link and join password
shown to attendees in emails, calendar invites and the UI. All functions
are pure: they read only the event (and the configured web app URL).

Precedence:
- Video-call data, when present, is the location
- Otherwise an `integrations:<name>` location resolves to the name
- Otherwise the raw location string is used verbatim
"""

import json
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from src.config import get_settings
from src.integrations.base import (
    INTEGRATION_PREFIX,
    CalendarEvent,
    IntegrationLocation,
    VideoCallData,
    VideoCallLocation,
    parse_event_location,
)
from src.integrations.exceptions import MissingVideoCallDataError
from src.services.video_providers import DAILY_VIDEO_POLICY, get_policy

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^https?://")


@dataclass
class ResolvedLocation:
    """Everything a notification needs to tell attendees where to go."""

    location: Optional[str]
    provider_name: str
    video_call_url: Optional[str] = None
    video_call_password: Optional[str] = None


def _webapp_url(base_url: Optional[str]) -> str:
    if base_url is None:
        base_url = get_settings().webapp_url
    return base_url.rstrip("/")


def _require_video_call_data(event: CalendarEvent, operation: str) -> VideoCallData:
    if event.video_call_data is None:
        raise MissingVideoCallDataError(event.uid, operation)
    return event.video_call_data


def _booking_link(event: CalendarEvent, route: str, base_url: Optional[str]) -> str:
    return f"{_webapp_url(base_url)}/{route}/{quote(get_uid(event), safe='')}"


def get_uid(event: CalendarEvent) -> str:
    """
    Get the booking identity of an event.

    Events without a uid get a UUIDv5 derived from their identity fields
    (title, times, organizer, calendar and video room), so the same event
    always yields the same identity (and the same links).

    Args:
        event: Event to identify

    Returns:
        Event uid string
    """
    if event.uid:
        return event.uid

    identity = {
        "title": event.title,
        "start_time": event.start_time.isoformat(),
        "end_time": event.end_time.isoformat(),
        "organizer": event.organizer,
        "calendar_id": event.calendar_id,
        "video_call_id": event.video_call_data.id if event.video_call_data else None,
    }
    canonical = json.dumps(identity, sort_keys=True)
    return str(uuid.uuid5(uuid.NAMESPACE_URL, canonical))


def get_public_video_call_url(event: CalendarEvent, base_url: Optional[str] = None) -> str:
    """
    Build the app-hosted join link for an event.

    The web app mediates access to the built-in video room through this
    route, so the provider's raw room URL is never shared.

    Args:
        event: Event to link to
        base_url: Web app base URL (defaults to WEBAPP_URL setting)

    Returns:
        URL of the form <base_url>/video/<uid>, uid percent-encoded
    """
    return _booking_link(event, "video", base_url)


def get_video_call_url(event: CalendarEvent, base_url: Optional[str] = None) -> str:
    """
    Get the join link attendees should use.

    Args:
        event: Event with video-call data
        base_url: Web app base URL (defaults to WEBAPP_URL setting)

    Returns:
        Public app URL for providers that require it, else the provider URL

    Raises:
        MissingVideoCallDataError: If the event has no video-call data
    """
    video_call_data = _require_video_call_data(event, "get_video_call_url")
    policy = get_policy(video_call_data.type)

    if policy.use_public_url:
        logger.debug(f"Using public video URL for provider '{video_call_data.type}'")
        return get_public_video_call_url(event, base_url)

    logger.debug(f"Passing through join URL for provider '{video_call_data.type}'")
    return video_call_data.url


def get_video_call_password(event: CalendarEvent) -> str:
    """
    Get the join password attendees should be shown.

    Args:
        event: Event with video-call data

    Returns:
        Empty string for providers whose password is never exposed,
        else the stored password verbatim

    Raises:
        MissingVideoCallDataError: If the event has no video-call data
    """
    video_call_data = _require_video_call_data(event, "get_video_call_password")
    policy = get_policy(video_call_data.type)

    if not policy.expose_password:
        logger.debug(f"Suppressing password for provider '{video_call_data.type}'")
        return ""

    logger.debug(f"Passing through password for provider '{video_call_data.type}'")
    return video_call_data.password


def get_location(event: CalendarEvent, base_url: Optional[str] = None) -> Optional[str]:
    """
    Get the location text to display for an event.

    Args:
        event: Event to resolve
        base_url: Web app base URL (defaults to WEBAPP_URL setting)

    Returns:
        Join link for video meetings, integration name for
        `integrations:<name>` locations, else the raw location (may be None)
    """
    location = parse_event_location(event)

    if isinstance(location, VideoCallLocation):
        return get_video_call_url(event, base_url)

    if isinstance(location, IntegrationLocation):
        return location.provider_name

    return location.address


def get_provider_name(event: CalendarEvent) -> str:
    """
    Get a display name for the service hosting the meeting.

    Returns:
        Capitalized integration name for `integrations:<name>` locations,
        the URL itself for http(s) locations, else an empty string
    """
    location = event.location
    if not location:
        return ""

    if location.startswith(INTEGRATION_PREFIX):
        name = location[len(INTEGRATION_PREFIX):]
        if name == "daily":
            return DAILY_VIDEO_POLICY.label
        if not name:
            return ""
        return name[0].upper() + name[1:]

    if _URL_PATTERN.match(location):
        return location

    return ""


def get_cancel_link(event: CalendarEvent, base_url: Optional[str] = None) -> str:
    """Link attendees follow to cancel the booking."""
    return _booking_link(event, "cancel", base_url)


def get_reschedule_link(event: CalendarEvent, base_url: Optional[str] = None) -> str:
    """Link attendees follow to reschedule the booking."""
    return _booking_link(event, "reschedule", base_url)


def resolve_event_location(
    event: CalendarEvent,
    base_url: Optional[str] = None,
) -> ResolvedLocation:
    """
    Resolve location, join link and password in one pass.

    Video fields are None when the event has no video-call data, so
    callers never need to catch MissingVideoCallDataError.

    Args:
        event: Event to resolve
        base_url: Web app base URL (defaults to WEBAPP_URL setting)

    Returns:
        ResolvedLocation record
    """
    base_url = _webapp_url(base_url)

    resolved = ResolvedLocation(
        location=get_location(event, base_url),
        provider_name=get_provider_name(event),
    )

    if event.video_call_data is not None:
        resolved.video_call_url = get_video_call_url(event, base_url)
        resolved.video_call_password = get_video_call_password(event)
        if not resolved.provider_name:
            resolved.provider_name = get_policy(event.video_call_data.type).label

    return resolved
