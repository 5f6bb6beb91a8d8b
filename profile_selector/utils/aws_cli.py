"""
AWS CLI helpers

Looks up the configured region and checks the caller identity of a profile.
The profile is handed to each external command through an environment built
for that one call, so the environment of this process is never changed.
"""

import json
import logging
import os
import subprocess
from typing import Dict, List, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import IdentityCheckFailure

logger = logging.getLogger(__name__)

__all__ = [
    'profile_env',
    'get_current_region',
    'identity_command',
    'check_identity',
    'format_identity',
    'NOT_SET',
]

NOT_SET = "Not set"


def profile_env(profile_name: Optional[str],
                base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build the environment for a single AWS CLI call.

    Args:
        profile_name: Profile to expose as AWS_PROFILE, or None to leave it as is
        base: Environment to copy (defaults to ``os.environ``)

    Returns:
        A new dict; ``base`` is not modified
    """
    env = dict(os.environ if base is None else base)
    if profile_name:
        env["AWS_PROFILE"] = profile_name
    return env


def get_current_region(profile_name: Optional[str] = None, aws_cli: str = "aws",
                       timeout: float = 15.0) -> str:
    """
    Get the region the AWS CLI resolves for a profile.

    Args:
        profile_name: AWS profile name or None for the ambient one
        aws_cli: AWS CLI executable
        timeout: Seconds to wait for the command

    Returns:
        Region name, or "Not set" if none is configured or the lookup failed
    """
    cmd = [aws_cli, "configure", "get", "region"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout,
                                env=profile_env(profile_name))
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Region lookup failed: %s", e)
        return NOT_SET
    region = result.stdout.strip() if result.returncode == 0 else ""
    return region or NOT_SET


def identity_command(backend: str, aws_cli: str = "aws") -> List[str]:
    """Command line for the identity check of the cli and op backends."""
    cmd = [aws_cli, "sts", "get-caller-identity"]
    if backend == "op":
        # 1Password injects the secrets referenced by the credentials file
        return ["op", "run", "--"] + cmd
    return cmd


def _check_identity_sdk(profile_name: str) -> str:
    try:
        session = boto3.Session(profile_name=profile_name)
        identity = session.client("sts").get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise IdentityCheckFailure(profile_name, str(e)) from e
    identity.pop("ResponseMetadata", None)
    return json.dumps(identity, indent=4)


def check_identity(profile_name: str, backend: str = "cli", aws_cli: str = "aws",
                   timeout: float = 15.0) -> str:
    """
    Confirm a profile works by asking STS who the caller is.

    Args:
        profile_name: Profile to check
        backend: "cli", "op" or "sdk"
        aws_cli: AWS CLI executable for the cli and op backends
        timeout: Seconds to wait for the command

    Returns:
        The identity document as printed by the AWS CLI

    Raises:
        IdentityCheckFailure: If the command fails or cannot be run
    """
    if backend == "sdk":
        return _check_identity_sdk(profile_name)

    cmd = identity_command(backend, aws_cli)
    logger.debug("Running %s with AWS_PROFILE=%s", " ".join(cmd), profile_name)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout,
                                env=profile_env(profile_name))
    except subprocess.TimeoutExpired as e:
        raise IdentityCheckFailure(profile_name, f"timed out after {timeout:g}s") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise IdentityCheckFailure(profile_name, str(e)) from e

    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        raise IdentityCheckFailure(profile_name, detail)
    return result.stdout.strip()


def format_identity(output: str) -> str:
    """
    Summarize an identity document as ``Account: ... ARN: ...``.

    Falls back to the raw output when it is not JSON.
    """
    try:
        identity = json.loads(output)
    except (json.JSONDecodeError, TypeError):
        return output
    if not isinstance(identity, dict):
        return output
    parts = []
    if identity.get("Account"):
        parts.append(f"Account: {identity['Account']}")
    if identity.get("Arn"):
        parts.append(f"ARN: {identity['Arn']}")
    return "  ".join(parts) if parts else output
