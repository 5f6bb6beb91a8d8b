"""
Helpers around the selection core: AWS CLI calls and menu labels.
"""

from .aws_cli import get_current_region, check_identity, format_identity, profile_env
from .labels import ProfileChoice, build_choices, format_profile_label, get_profile_emoji

__all__ = [
    'get_current_region',
    'check_identity',
    'format_identity',
    'profile_env',
    'ProfileChoice',
    'build_choices',
    'format_profile_label',
    'get_profile_emoji',
]
