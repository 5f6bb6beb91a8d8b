"""
Error types raised by the profile selector.

Every error carries a single human-readable line which the CLI prints to
stderr before choosing an exit status.
"""

__all__ = [
    'ProfileSelectorError',
    'ConfigUnreadable',
    'NoProfiles',
    'NoMatch',
    'NoLastProfile',
    'SelectionCancelled',
    'PersistenceFailure',
    'IdentityCheckFailure',
]


class ProfileSelectorError(Exception):
    """Base class for all profile selector errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigUnreadable(ProfileSelectorError):
    """The credentials file could not be read."""

    def __init__(self, path, reason: str):
        super().__init__(f"Error reading AWS credentials from {path}: {reason}")
        self.path = path


class NoProfiles(ProfileSelectorError):
    """The credentials file holds no selectable profiles."""

    def __init__(self):
        super().__init__("No non-default profiles found in AWS credentials.")


class NoMatch(ProfileSelectorError):
    """A search query matched no profile."""

    def __init__(self, query: str):
        super().__init__(f"No matching profiles found for '{query}'.")
        self.query = query


class NoLastProfile(ProfileSelectorError):
    """Reuse of the last profile was requested but none is usable."""

    def __init__(self, name=None):
        if name:
            super().__init__(f"Last used profile '{name}' no longer exists.")
        else:
            super().__init__("No last used profile found.")
        self.name = name


class SelectionCancelled(ProfileSelectorError):
    """The user aborted the interactive prompt."""

    def __init__(self):
        super().__init__("Selection cancelled")


class PersistenceFailure(ProfileSelectorError):
    """The last used profile could not be saved."""

    def __init__(self, path, reason: str):
        super().__init__(f"Could not save last used profile to {path}: {reason}")
        self.path = path


class IdentityCheckFailure(ProfileSelectorError):
    """The identity check for the selected profile failed."""

    def __init__(self, profile_name: str, reason: str):
        super().__init__(f"Error executing AWS CLI command for '{profile_name}': {reason}")
        self.profile_name = profile_name
