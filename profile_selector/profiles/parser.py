"""
Credentials file parser.

Turns the INI-like text of an AWS credentials file into a ProfileStore.
Parsing never fails: sections with unusable names and lines that are not
assignments are skipped, so the worst case is an empty store.
"""

import logging
import re
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Union

from ..errors import ConfigUnreadable
from .store import ProfileRecord, ProfileStore

logger = logging.getLogger(__name__)

__all__ = [
    'ParsedLine',
    'classify_line',
    'is_valid_profile_name',
    'parse',
    'load_store',
    'SECTION',
    'INVALID_SECTION',
    'ASSIGNMENT',
    'IGNORED',
]

PROFILE_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$")
RESERVED_PROFILE = "default"

SECTION = "section"
INVALID_SECTION = "invalid_section"
ASSIGNMENT = "assignment"
IGNORED = "ignored"


class ParsedLine(NamedTuple):
    kind: str
    name: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None


def is_valid_profile_name(name: str) -> bool:
    """Check that a profile name starts alphanumeric and holds only [A-Za-z0-9_-]."""
    return bool(PROFILE_NAME_RE.fullmatch(name))


def classify_line(line: str) -> ParsedLine:
    """
    Classify one line of credentials text.

    Args:
        line: Raw line, surrounding whitespace allowed

    Returns:
        ParsedLine tagged SECTION, INVALID_SECTION, ASSIGNMENT or IGNORED
    """
    stripped = line.strip()
    if stripped.startswith("[") and stripped.endswith("]") and len(stripped) >= 2:
        name = stripped[1:-1]
        if is_valid_profile_name(name) and name != RESERVED_PROFILE:
            return ParsedLine(SECTION, name=name)
        return ParsedLine(INVALID_SECTION, name=name)
    if "=" in stripped:
        key, value = stripped.split("=", 1)
        return ParsedLine(ASSIGNMENT, key=key.strip(), value=value.strip())
    return ParsedLine(IGNORED)


def parse(text: str) -> ProfileStore:
    """
    Parse credentials text into a ProfileStore.

    Args:
        text: Full contents of a credentials file

    Returns:
        ProfileStore with one record per valid, non-default section
    """
    profiles: Dict[str, ProfileRecord] = {}
    current: Optional[ProfileRecord] = None

    for line in text.split("\n"):
        parsed = classify_line(line)
        if parsed.kind == SECTION:
            # Re-opening a section starts its record over
            current = ProfileRecord(parsed.name)
            profiles[parsed.name] = current
        elif parsed.kind == INVALID_SECTION:
            if parsed.name != RESERVED_PROFILE:
                logger.debug("Skipping section with invalid profile name [%s]", parsed.name)
            current = None
        elif parsed.kind == ASSIGNMENT and current is not None:
            current.set_key(parsed.key, parsed.value)

    return ProfileStore(profiles)


def load_store(path: Union[str, Path]) -> ProfileStore:
    """
    Read and parse a credentials file.

    Args:
        path: Path to the credentials file

    Returns:
        Parsed ProfileStore

    Raises:
        ConfigUnreadable: If the file cannot be read
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = getattr(e, "strerror", None) or str(e)
        raise ConfigUnreadable(path, reason) from e
    store = parse(text)
    logger.debug("Loaded %d profiles from %s", len(store), path)
    return store
