"""Configuration management. All settings from environment variables with sensible defaults."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

__all__ = [
    'Settings',
    'load_settings',
    'IDENTITY_BACKENDS',
    'RANKING_STRATEGIES',
]

IDENTITY_BACKENDS = ("cli", "op", "sdk")
RANKING_STRATEGIES = ("terms", "fuzzy")

LAST_USED_FILENAME = ".aws-profile-selector-last"


def _get_aws_credentials_path() -> Path:
    """Get the path to the AWS credentials file."""
    aws_dir = Path.home() / ".aws"
    return aws_dir / "credentials"


def _get_last_used_path() -> Path:
    """Get the path to the file holding the last used profile name."""
    return Path.home() / LAST_USED_FILENAME


@dataclass(frozen=True)
class Settings:
    credentials_path: Path
    last_used_path: Path
    identity_backend: str = "cli"  # "cli", "op" (1Password wrapper) or "sdk" (boto3)
    ranking_strategy: str = "terms"  # "terms" or "fuzzy"
    aws_cli: str = "aws"
    timeout: float = 15.0

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the non-None values in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _choice(environ: Mapping[str, str], key: str, allowed, default: str) -> str:
    value = environ.get(key, "").strip().lower()
    if not value:
        return default
    if value not in allowed:
        logger.warning("Ignoring %s=%r, expected one of %s", key, value, ", ".join(allowed))
        return default
    return value


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    value = environ.get(key, "").strip()
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning("Ignoring %s=%r, not a number", key, value)
        return default
    if parsed <= 0:
        logger.warning("Ignoring %s=%r, must be positive", key, value)
        return default
    return parsed


def _path(environ: Mapping[str, str], key: str, default: Path) -> Path:
    value = environ.get(key, "").strip()
    return Path(value).expanduser() if value else default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Settings instance
    """
    if environ is None:
        environ = os.environ

    backend = _choice(environ, "PROFILE_SELECTOR_IDENTITY_BACKEND", IDENTITY_BACKENDS, "")
    if not backend:
        # USE_ONEPASS_CLI predates the backend switch and is still honoured
        backend = "op" if environ.get("USE_ONEPASS_CLI", "").strip().lower() == "true" else "cli"

    return Settings(
        credentials_path=_path(environ, "AWS_SHARED_CREDENTIALS_FILE", _get_aws_credentials_path()),
        last_used_path=_path(environ, "PROFILE_SELECTOR_LAST_USED_FILE", _get_last_used_path()),
        identity_backend=backend,
        ranking_strategy=_choice(environ, "PROFILE_SELECTOR_RANKING", RANKING_STRATEGIES, "terms"),
        aws_cli=environ.get("PROFILE_SELECTOR_AWS_CLI", "").strip() or "aws",
        timeout=_float(environ, "PROFILE_SELECTOR_TIMEOUT", 15.0),
    )
