#!/usr/bin/env python3
"""
AWS Profile Selector CLI

Pick an AWS profile from the shared credentials file, remember the choice
for next time, and confirm the profile works by asking STS for the caller
identity.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, load_settings
from .errors import (
    ConfigUnreadable,
    IdentityCheckFailure,
    NoLastProfile,
    NoProfiles,
    PersistenceFailure,
    SelectionCancelled,
)
from .profiles import LastUsedState, ProfileRecord, Ranker, Selector, load_store
from .prompt import QuestionaryPrompt
from .utils.aws_cli import check_identity, format_identity, get_current_region

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PERSISTENCE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-profile-selector",
        description="Select an AWS profile from your credentials file"
    )
    parser.add_argument("search", nargs="?", help="Search term; the best match is suggested first")
    parser.add_argument("--search", "-s", dest="search_option", metavar="TERM",
                        help="Same as the positional search term")
    parser.add_argument("--last", "-l", action="store_true",
                        help="Use the last saved profile without prompting")
    parser.add_argument("--fuzzy", action="store_true",
                        help="Use typo tolerant matching for the search term")
    parser.add_argument("--no-identity-check", dest="identity_check", action="store_false",
                        help="Skip the sts get-caller-identity check")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    return parser


def error(message: str) -> None:
    """Print a one line error to stderr."""
    print(f"❌ {message}", file=sys.stderr)


def activate_profile(profile: ProfileRecord, settings: Settings, identity_check: bool = True) -> None:
    """
    Report the selected profile and verify it.

    An identity check failure is only a warning; the selection stands.
    """
    profile_name = profile.name
    print(f"Selected profile: {profile}")
    region = get_current_region(profile_name, settings.aws_cli, settings.timeout)
    print(f"New default region: {region}")

    if not identity_check:
        return
    try:
        output = check_identity(profile_name, settings.identity_backend,
                                settings.aws_cli, settings.timeout)
    except IdentityCheckFailure as e:
        print(f"⚠️  {e}", file=sys.stderr)
        return
    print(f"✅ {format_identity(output)}")
    logger.debug("Identity check output: %s", output)


def handle_select(args, settings: Settings) -> int:
    """Run one selection and return the exit status."""
    try:
        store = load_store(settings.credentials_path)
    except ConfigUnreadable as e:
        error(str(e))
        return EXIT_CONFIG_ERROR

    def show_region():
        print(f"Current default region: {get_current_region(None, settings.aws_cli, settings.timeout)}")

    selector = Selector(
        store,
        LastUsedState(settings.last_used_path),
        QuestionaryPrompt(),
        ranker=Ranker(settings.ranking_strategy),
        before_menu=show_region,
    )

    query = args.search_option or args.search
    try:
        selected = selector.run(query=query, use_last=args.last)
    except (NoProfiles, SelectionCancelled) as e:
        print(str(e), file=sys.stderr)
        return EXIT_OK
    except NoLastProfile as e:
        error(str(e))
        return EXIT_CONFIG_ERROR
    except PersistenceFailure as e:
        error(str(e))
        return EXIT_PERSISTENCE_ERROR

    activate_profile(store.get(selected), settings, identity_check=args.identity_check)
    return EXIT_OK


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings().with_overrides(
        ranking_strategy="fuzzy" if args.fuzzy else None
    )
    sys.exit(handle_select(args, settings))


if __name__ == "__main__":
    main()
