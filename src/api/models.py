"""
Pydantic request and response models for the location resolver API.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.integrations.base import CalendarEvent, VideoCallData


# =============================================================================
# Request Models
# =============================================================================


class VideoCallDataPayload(BaseModel):
    """Conferencing details attached to an event."""

    type: str = Field(..., min_length=1, description="Provider identifier, e.g. daily_video")
    url: str = Field(..., description="Provider join URL")
    password: str = Field(default="", description="Join password, if the provider uses one")
    id: str = Field(default="", description="Provider room or meeting ID")


class CalendarEventPayload(BaseModel):
    """Calendar event as assembled by the booking flow."""

    title: str = Field(..., min_length=1, max_length=200, description="Event title")
    start_time: datetime = Field(..., description="Start time (ISO 8601)")
    end_time: datetime = Field(..., description="End time (ISO 8601)")
    uid: Optional[str] = Field(None, description="Booking uid")
    description: Optional[str] = Field(None, description="Event description")
    location: Optional[str] = Field(
        None,
        description="Free-text address or integrations:<ProviderName>",
        examples=["integrations:Cal.com", "1600 Amphitheatre Pkwy"],
    )
    video_call_data: Optional[VideoCallDataPayload] = Field(
        None,
        description="Conferencing details (takes precedence over location)",
    )
    organizer: Optional[str] = Field(None, description="Organizer email")
    attendees: list[str] = Field(default_factory=list, description="Attendee emails")

    @field_validator("title")
    @classmethod
    def validate_title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_time_order(self) -> "CalendarEventPayload":
        try:
            reversed_times = self.end_time < self.start_time
        except TypeError:
            raise ValueError("start_time and end_time must both include a timezone, or neither")
        if reversed_times:
            raise ValueError("end_time must not be before start_time")
        return self

    def to_calendar_event(self) -> CalendarEvent:
        """Convert to the internal event representation."""
        video_call_data = None
        if self.video_call_data is not None:
            video_call_data = VideoCallData(**self.video_call_data.model_dump())

        return CalendarEvent(
            title=self.title,
            start_time=self.start_time,
            end_time=self.end_time,
            uid=self.uid,
            description=self.description,
            location=self.location,
            video_call_data=video_call_data,
            organizer=self.organizer,
            attendees=list(self.attendees),
        )


# =============================================================================
# Response Models
# =============================================================================


class ResolvedLocationResponse(BaseModel):
    """Resolved location, join link and password for an event."""

    uid: str = Field(..., description="Booking uid (derived when not supplied)")
    location: Optional[str] = Field(None, description="Location text to display")
    provider_name: str = Field(..., description="Display name of the meeting provider")
    video_call_url: Optional[str] = Field(None, description="Join link (video meetings only)")
    video_call_password: Optional[str] = Field(
        None, description="Join password to show (video meetings only, may be empty)"
    )
    cancel_link: str = Field(..., description="Link to cancel the booking")
    reschedule_link: str = Field(..., description="Link to reschedule the booking")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uid": "bk_123",
                "location": "http://localhost:3000/video/bk_123",
                "provider_name": "Cal Video",
                "video_call_url": "http://localhost:3000/video/bk_123",
                "video_call_password": "",
                "cancel_link": "http://localhost:3000/cancel/bk_123",
                "reschedule_link": "http://localhost:3000/reschedule/bk_123",
            }
        }
    )


class ProviderPolicyResponse(BaseModel):
    """A registered video provider policy."""

    type: str = Field(..., description="Provider identifier")
    label: str = Field(..., description="Provider display name")
    use_public_url: bool = Field(..., description="Join link is replaced by the app's public URL")
    expose_password: bool = Field(..., description="Password is shown to attendees")


class ErrorResponse(BaseModel):
    """Error information for failed requests."""

    error_type: Literal[
        "validation_error",
        "http_error",
        "missing_video_call_data",
        "internal_error",
    ] = Field(..., description="Type of error")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(None, description="Additional error details")
    retryable: bool = Field(default=False, description="Whether request can be retried")


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    webapp_url: str = Field(..., description="Base URL used for generated links")
