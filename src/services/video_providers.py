"""
Video provider policy registry.

Each conferencing provider maps to a policy record describing how its join
URL and password may be shown to attendees. Providers without a registered
policy fall back to DEFAULT_POLICY, which passes provider data through.

The built-in provider ("daily_video") is the only one registered by
default: its raw room URL is replaced by the app-hosted public URL and its
password is never exposed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


DAILY_VIDEO_TYPE = "daily_video"


@dataclass(frozen=True)
class VideoProviderPolicy:
    """
    How to present a provider's join link and password.

    Attributes:
        type: Provider identifier as stamped into VideoCallData.type
              (None for the fallback policy)
        label: Human-readable provider name
        use_public_url: Replace the provider URL by the app's /video/<uid> link
        expose_password: Show the stored password to attendees
    """

    type: Optional[str]
    label: str
    use_public_url: bool = False
    expose_password: bool = True


DEFAULT_POLICY = VideoProviderPolicy(type=None, label="Video call")

DAILY_VIDEO_POLICY = VideoProviderPolicy(
    type=DAILY_VIDEO_TYPE,
    label="Cal Video",
    use_public_url=True,
    expose_password=False,
)

_policies: dict[str, VideoProviderPolicy] = {
    DAILY_VIDEO_TYPE: DAILY_VIDEO_POLICY,
}


def get_policy(provider_type: Optional[str]) -> VideoProviderPolicy:
    """
    Look up the policy for a provider type.

    Args:
        provider_type: VideoCallData.type value (open enumeration)

    Returns:
        Registered policy, or DEFAULT_POLICY for unknown providers
    """
    if provider_type is None:
        return DEFAULT_POLICY
    return _policies.get(provider_type, DEFAULT_POLICY)


def register_policy(policy: VideoProviderPolicy) -> None:
    """
    Add or replace the policy for a provider.

    Raises:
        ValueError: If the policy has no provider type
    """
    if not policy.type:
        raise ValueError("Provider policy must declare a provider type")

    if policy.type in _policies:
        logger.info(f"Replacing video provider policy for '{policy.type}'")
    _policies[policy.type] = policy


def unregister_policy(provider_type: str) -> bool:
    """
    Remove a provider policy.

    Returns:
        True if a policy was removed, False if none was registered
    """
    return _policies.pop(provider_type, None) is not None


def registered_provider_types() -> list[str]:
    """List provider types with a non-default policy."""
    return sorted(_policies)
