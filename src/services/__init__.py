"""
Service layer for the event location resolver.

Provides:
- Location, join link and password resolution for calendar events
- Video provider policy registry
"""

from src.services.event_parser import (
    ResolvedLocation,
    get_uid,
    get_location,
    get_video_call_url,
    get_public_video_call_url,
    get_video_call_password,
    get_provider_name,
    get_cancel_link,
    get_reschedule_link,
    resolve_event_location,
)

from src.services.video_providers import (
    DAILY_VIDEO_TYPE,
    DEFAULT_POLICY,
    DAILY_VIDEO_POLICY,
    VideoProviderPolicy,
    get_policy,
    register_policy,
    unregister_policy,
    registered_provider_types,
)

__all__ = [
    # Location resolution
    "ResolvedLocation",
    "get_uid",
    "get_location",
    "get_video_call_url",
    "get_public_video_call_url",
    "get_video_call_password",
    "get_provider_name",
    "get_cancel_link",
    "get_reschedule_link",
    "resolve_event_location",
    # Provider policies
    "DAILY_VIDEO_TYPE",
    "DEFAULT_POLICY",
    "DAILY_VIDEO_POLICY",
    "VideoProviderPolicy",
    "get_policy",
    "register_policy",
    "unregister_policy",
    "registered_provider_types",
]
