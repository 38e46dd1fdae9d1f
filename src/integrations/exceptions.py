"""
Custom exceptions for calendar event handling.

Provides structured error handling with retryable flags.
"""

from typing import Optional


class CalendarEventError(Exception):
    """Base exception for calendar event operations."""

    retryable: bool = False

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class MissingVideoCallDataError(CalendarEventError):
    """
    A video-call specific lookup was made on an event without video-call data.

    Causes:
    - Booking flow claims a video meeting but never stamped conferencing data
    - Caller skipped the has_video_call check

    Indicates a data-integrity bug upstream, never retryable.
    """

    retryable = False

    def __init__(self, event_uid: Optional[str], operation: str):
        super().__init__(
            f"{operation} requires video call data, but event {event_uid or '<no uid>'} has none"
        )
        self.event_uid = event_uid
        self.operation = operation


class CalendarEventValidationError(CalendarEventError):
    """
    Invalid event payload from an upstream provider.

    Causes:
    - Missing start/end times
    - Unparseable datetime strings
    """

    retryable = False
