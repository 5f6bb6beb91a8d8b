"""
Profile Store

In-memory collection of parsed AWS profiles plus the small file that
remembers which profile was selected last.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..errors import PersistenceFailure

logger = logging.getLogger(__name__)

__all__ = [
    'ProfileRecord',
    'ProfileStore',
    'LastUsedState',
    'PROFILE_KEYS',
]

# Credentials file key -> ProfileRecord attribute, in serialization order
PROFILE_KEYS = {
    "aws_account_id": "account_id",
    "aws_access_key_id": "access_key_id",
    "aws_secret_access_key": "secret_access_key",
    "region": "region",
    "role_arn": "role_arn",
    "source_profile": "source_profile",
}


class ProfileRecord:
    """Contains the recognized attributes of one credentials profile."""
    def __init__(self, name: str, account_id: Optional[str] = None,
                 access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None,
                 region: Optional[str] = None, role_arn: Optional[str] = None,
                 source_profile: Optional[str] = None):
        self.name = name
        self.account_id = account_id
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.role_arn = role_arn
        self.source_profile = source_profile

    def set_key(self, key: str, value: str) -> bool:
        """
        Set the attribute behind a credentials file key.

        Args:
            key: Key name as written in the credentials file
            value: Trimmed value; an empty value clears the attribute

        Returns:
            True if the key is recognized, False otherwise
        """
        attr = PROFILE_KEYS.get(key)
        if attr is None:
            return False
        setattr(self, attr, value or None)
        return True

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Return the recognized attributes keyed by credentials file key."""
        return {key: getattr(self, attr) for key, attr in PROFILE_KEYS.items()}

    def to_ini(self) -> str:
        """Serialize the profile back into a credentials file section."""
        lines = [f"[{self.name}]"]
        for key, value in self.as_dict().items():
            if value is not None:
                lines.append(f"{key}={value}")
        return "\n".join(lines) + "\n"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProfileRecord):
            return NotImplemented
        return self.name == other.name and self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"ProfileRecord(name={self.name!r}, region={self.region!r}, account_id={self.account_id!r})"

    def __str__(self) -> str:
        region_str = f" - {self.region}" if self.region else ""
        account_str = f" - Account: {self.account_id}" if self.account_id else ""
        return f"{self.name}{region_str}{account_str}"


class ProfileStore:
    """Profiles keyed by name. Iteration is always in name order."""

    def __init__(self, profiles: Optional[Dict[str, ProfileRecord]] = None):
        self._profiles: Dict[str, ProfileRecord] = dict(profiles or {})

    def get(self, name: str) -> Optional[ProfileRecord]:
        return self._profiles.get(name)

    def sorted_names(self) -> List[str]:
        return sorted(self._profiles)

    def sorted_profiles(self) -> List[ProfileRecord]:
        return [self._profiles[name] for name in self.sorted_names()]

    def __contains__(self, name) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[ProfileRecord]:
        return iter(self.sorted_profiles())

    def __len__(self) -> int:
        return len(self._profiles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProfileStore):
            return NotImplemented
        return self._profiles == other._profiles

    def __repr__(self) -> str:
        return f"ProfileStore({self.sorted_names()!r})"


class LastUsedState:
    """
    The name of the most recently selected profile, kept in a plain text file.

    A missing or unreadable file simply means there is no last used profile.
    Writes replace the file wholesale.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        """
        Read the last used profile name.

        Returns:
            The trimmed profile name, or None if nothing was saved
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Could not read %s: %s", self.path, e)
            return None
        name = content.strip()
        return name or None

    def write(self, profile_name: str) -> None:
        """
        Save a profile name as the last used one.

        Args:
            profile_name: Name of the selected profile

        Raises:
            PersistenceFailure: If the file cannot be written
        """
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(directory), prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(profile_name)
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, self.path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
                raise
        except OSError as e:
            raise PersistenceFailure(self.path, e.strerror or str(e)) from e
        logger.debug("Saved last used profile %s to %s", profile_name, self.path)
