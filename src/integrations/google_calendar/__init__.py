"""
Google Calendar integration.

Builds normalized events (including conference data) from Google Calendar
API payloads and renders resolved locations back into invites.
"""

from src.integrations.google_calendar.adapter import GoogleCalendarAdapter

__all__ = [
    "GoogleCalendarAdapter",
]
