"""
Profile selection.

Decides which profile to suggest or preselect, runs one selection from search
or menu through to saving the choice, and records the final choice as the
last used profile.
"""

import logging
import sys
from typing import Callable, Optional, Sequence

from ..errors import NoLastProfile, NoMatch, NoProfiles, SelectionCancelled
from ..utils.labels import ProfileChoice, build_choices
from .ranking import Ranker
from .store import LastUsedState, ProfileStore

logger = logging.getLogger(__name__)

__all__ = [
    'choose_default',
    'default_index',
    'resolve_from_query',
    'finalize',
    'Selector',
]


def _report(message: str) -> None:
    print(message, file=sys.stderr)


def choose_default(store: ProfileStore, last_used: Optional[str]) -> Optional[str]:
    """
    Pick the profile to preselect.

    Args:
        store: Parsed profiles
        last_used: Last used profile name, if any

    Returns:
        ``last_used`` when it is still in the store, otherwise the first name
        in sorted order, or None for an empty store
    """
    if last_used and last_used in store:
        return last_used
    names = store.sorted_names()
    return names[0] if names else None


def default_index(store: ProfileStore, last_used: Optional[str]) -> int:
    """Position of the default profile in sorted order."""
    name = choose_default(store, last_used)
    if name is None:
        return 0
    return store.sorted_names().index(name)


def resolve_from_query(store: ProfileStore, query: str,
                       ranker: Optional[Ranker] = None) -> Optional[str]:
    """
    Suggest the best match for a query.

    The suggestion still needs the user's confirmation before it counts as
    selected.

    Returns:
        Name of the top ranked profile, or None if nothing matched
    """
    ranked = (ranker or Ranker()).rank(store, query)
    return ranked[0].name if ranked else None


def finalize(state: LastUsedState, selected_name: str) -> str:
    """
    Record the selected profile as the last used one.

    Raises:
        PersistenceFailure: If the state file cannot be written
    """
    state.write(selected_name)
    logger.debug("Finalized profile %s", selected_name)
    return selected_name


class Selector:
    """
    Runs one profile selection.

    ``prompt`` must provide ``select(choices, default_index)`` returning a
    profile name or None, and ``confirm(message)`` returning True, False or
    None. ``before_menu`` is called right before the full menu is shown.
    """

    def __init__(self, store: ProfileStore, state: LastUsedState, prompt,
                 ranker: Optional[Ranker] = None,
                 report: Optional[Callable[[str], None]] = None,
                 before_menu: Optional[Callable[[], None]] = None):
        self.store = store
        self.state = state
        self.prompt = prompt
        self.ranker = ranker or Ranker()
        self.report = report or _report
        self.before_menu = before_menu

    def choices(self) -> Sequence[ProfileChoice]:
        return build_choices(self.store.sorted_profiles())

    def suggest(self, query: str) -> Optional[str]:
        """
        Offer the best match for a query.

        Returns:
            The confirmed profile name, or None when nothing matched or the
            suggestion was declined

        Raises:
            SelectionCancelled: If the confirmation prompt was aborted
        """
        suggestion = resolve_from_query(self.store, query, self.ranker)
        if suggestion is None:
            self.report(str(NoMatch(query)))
            return None
        answer = self.prompt.confirm(f'Use suggested profile "{suggestion}"?')
        if answer is None:
            raise SelectionCancelled()
        return suggestion if answer else None

    def interactive_select(self) -> str:
        """
        Show the full menu with the default profile preselected.

        Raises:
            SelectionCancelled: If the user aborted the menu
        """
        if self.before_menu is not None:
            self.before_menu()
        index = default_index(self.store, self.state.read())
        selected = self.prompt.select(self.choices(), index)
        if not selected:
            raise SelectionCancelled()
        return selected

    def last_used(self) -> str:
        name = self.state.read()
        if not name:
            raise NoLastProfile()
        if name not in self.store:
            raise NoLastProfile(name)
        return name

    def run(self, query: Optional[str] = None, use_last: bool = False) -> str:
        """
        Select a profile and save it as the last used one.

        Args:
            query: Optional search text; its best match is offered first
            use_last: Reuse the last used profile without prompting

        Returns:
            The selected profile name

        Raises:
            NoProfiles: If the store is empty
            NoLastProfile: If ``use_last`` is set but no usable name is saved
            SelectionCancelled: If the user aborted a prompt
            PersistenceFailure: If the choice could not be saved
        """
        if not len(self.store):
            raise NoProfiles()

        selected = None
        if use_last:
            selected = self.last_used()
        elif query and query.strip():
            selected = self.suggest(query)

        if selected is None:
            selected = self.interactive_select()

        return finalize(self.state, selected)
