"""
Display labels for the profile selection prompt.
"""

from typing import TYPE_CHECKING, List, NamedTuple, Optional

if TYPE_CHECKING:
    from ..profiles.store import ProfileRecord

__all__ = [
    'ProfileChoice',
    'get_profile_emoji',
    'format_profile_label',
    'build_choices',
]


class ProfileChoice(NamedTuple):
    label: str
    name: str
    region: Optional[str] = None


def get_profile_emoji(profile_name: str) -> str:
    """Pick a traffic-light marker from the environment hinted at by the name."""
    if "prod" in profile_name:
        return "🔴"
    if "test" in profile_name:
        return "🟡"
    return "🟢"


def format_profile_label(index: int, profile: "ProfileRecord") -> str:
    """
    Build the menu label for a profile.

    Args:
        index: Zero-based position in the menu
        profile: Profile to describe

    Returns:
        Label such as ``"2. example prod (us-west-2) 🔴"``
    """
    region_str = f" ({profile.region})" if profile.region else ""
    friendly_name = " ".join(profile.name.split("-"))
    return f"{index + 1}. {friendly_name}{region_str} {get_profile_emoji(profile.name)}"


def build_choices(profiles: List["ProfileRecord"]) -> List[ProfileChoice]:
    """Label each profile in the given order."""
    return [
        ProfileChoice(format_profile_label(i, p), p.name, p.region)
        for i, p in enumerate(profiles)
    ]
