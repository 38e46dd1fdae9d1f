"""
Mapping between internal CalendarEvent format and Google Calendar API format.

Handles:
- DateTime formatting (RFC 3339 for Google API)
- All-day event handling
- Conference data (Meet, add-on providers) to VideoCallData
- Extended properties for the video provider type
- Attendee mapping
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil.parser import parse as parse_datetime

from src.integrations.base import CalendarEvent, VideoCallData
from src.integrations.exceptions import CalendarEventValidationError
from src.services.event_parser import resolve_event_location

logger = logging.getLogger(__name__)


# Google conferenceSolution.key.type -> internal VideoCallData.type
CONFERENCE_TYPE_FROM_GOOGLE = {
    "hangoutsMeet": "google_meet_video",
    "eventHangout": "google_meet_video",
    "eventNamedHangout": "google_meet_video",
}

# Private extended property holding the internal provider type
VIDEO_CALL_TYPE_PROPERTY = "video_call_type"

# Entry point keys that may carry a join secret, in lookup order
_PASSWORD_KEYS = ("password", "passcode", "meetingCode", "accessCode", "pin")


class GoogleCalendarAdapter:
    """Maps between internal CalendarEvent format and Google Calendar API format."""

    @staticmethod
    def to_google_event(event: CalendarEvent, base_url: Optional[str] = None) -> dict:
        """
        Convert an internal event to Google Calendar API format.

        Location, join link and password come from the location resolver,
        so invites show exactly what notifications show.

        Args:
            event: Internal event
            base_url: Web app base URL for public video links

        Returns:
            Dict suitable for Google Calendar API insert/update
        """
        resolved = resolve_event_location(event, base_url)

        google_event: dict = {
            "summary": event.title,
            "start": {
                "dateTime": _format_datetime(event.start_time),
                "timeZone": "UTC",
            },
            "end": {
                "dateTime": _format_datetime(event.end_time),
                "timeZone": "UTC",
            },
        }

        if event.uid:
            google_event["iCalUID"] = event.uid

        if resolved.location:
            google_event["location"] = resolved.location

        description_parts = []
        if event.description:
            description_parts.append(event.description)
        if resolved.video_call_url:
            description_parts.append(f"Join: {resolved.video_call_url}")
        if resolved.video_call_password:
            description_parts.append(f"Password: {resolved.video_call_password}")
        if description_parts:
            google_event["description"] = "\n\n".join(description_parts)

        if event.attendees:
            google_event["attendees"] = [
                {"email": email} for email in event.attendees
            ]

        if event.video_call_data is not None:
            google_event["extendedProperties"] = {
                "private": {VIDEO_CALL_TYPE_PROPERTY: event.video_call_data.type},
            }

        return google_event

    @staticmethod
    def from_google_event(google_event: dict, calendar_id: str) -> CalendarEvent:
        """
        Convert Google Calendar event to internal format.

        Args:
            google_event: Event from Google Calendar API
            calendar_id: Calendar ID the event belongs to

        Returns:
            CalendarEvent in internal format

        Raises:
            CalendarEventValidationError: If start/end times are missing or invalid
        """
        start_data = google_event.get("start", {})
        end_data = google_event.get("end", {})

        try:
            if "dateTime" in start_data:
                start_time = _parse_datetime(start_data["dateTime"])
                end_time = _parse_datetime(end_data["dateTime"])
            elif "date" in start_data:
                # All-day event
                start_time = _parse_date(start_data["date"])
                end_time = _parse_date(end_data["date"])
            else:
                raise CalendarEventValidationError(
                    f"Event {google_event.get('id', '<unknown>')} has no start time"
                )
        except (KeyError, ValueError, OverflowError) as e:
            raise CalendarEventValidationError(
                f"Event {google_event.get('id', '<unknown>')} has invalid times: {e}",
                original_error=e,
            ) from e

        attendees = []
        for attendee in google_event.get("attendees", []):
            email = attendee.get("email")
            if email:
                attendees.append(email)

        ext_props = google_event.get("extendedProperties", {})
        private_props = ext_props.get("private", {})

        metadata = {
            "google_id": google_event.get("id"),
            "etag": google_event.get("etag"),
            "html_link": google_event.get("htmlLink"),
            **private_props,
        }

        return CalendarEvent(
            uid=google_event.get("iCalUID") or google_event.get("id"),
            calendar_id=calendar_id,
            title=google_event.get("summary", "Untitled"),
            description=google_event.get("description"),
            start_time=start_time,
            end_time=end_time,
            location=google_event.get("location"),
            video_call_data=_parse_conference_data(
                google_event.get("conferenceData"),
                private_props.get(VIDEO_CALL_TYPE_PROPERTY),
            ),
            organizer=google_event.get("organizer", {}).get("email"),
            attendees=attendees,
            metadata=metadata,
        )


def _parse_conference_data(
    conference_data: Optional[dict],
    provider_type: Optional[str] = None,
) -> Optional[VideoCallData]:
    """
    Extract VideoCallData from a Google conferenceData block.

    Args:
        conference_data: conferenceData from the Google event (may be None)
        provider_type: Internal provider type stored in extended properties,
                       which takes precedence over the Google solution key

    Returns:
        VideoCallData, or None if there is no video entry point
    """
    if not conference_data:
        return None

    video_entry = None
    for entry_point in conference_data.get("entryPoints", []):
        if entry_point.get("entryPointType") == "video" and entry_point.get("uri"):
            video_entry = entry_point
            break

    if video_entry is None:
        return None

    if not provider_type:
        solution_type = (
            conference_data.get("conferenceSolution", {}).get("key", {}).get("type", "")
        )
        provider_type = CONFERENCE_TYPE_FROM_GOOGLE.get(solution_type, solution_type or "unknown")

    password = ""
    for key in _PASSWORD_KEYS:
        if video_entry.get(key):
            password = video_entry[key]
            break

    logger.debug(f"Parsed conference data for provider '{provider_type}'")

    return VideoCallData(
        type=provider_type,
        url=video_entry["uri"],
        password=password,
        id=conference_data.get("conferenceId", ""),
    )


def _format_datetime(dt: datetime) -> str:
    """
    Format datetime to RFC 3339 format for Google API.

    Args:
        dt: Datetime to format

    Returns:
        RFC 3339 formatted string
    """
    # Ensure UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        dt = dt.astimezone(timezone.utc)

    return dt.isoformat()


def _parse_datetime(dt_str: str) -> datetime:
    """
    Parse datetime string from Google API.

    Args:
        dt_str: RFC 3339 datetime string

    Returns:
        Parsed datetime (naive values assumed UTC)
    """
    dt = parse_datetime(dt_str)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_date(date_str: str) -> datetime:
    """
    Parse date string from Google API (for all-day events).

    Args:
        date_str: Date string in YYYY-MM-DD format

    Returns:
        Datetime at midnight UTC
    """
    return datetime.strptime(date_str, "%Y-%m-%d").replace(tzinfo=timezone.utc)
