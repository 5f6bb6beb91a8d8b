"""
Profile ranking.

Two strategies are available. ``terms`` counts how many whitespace separated
query terms occur in a profile name and is the default. ``fuzzy`` scores the
closest approximate match of the query inside the name, which tolerates typos
but may order candidates differently.
"""

from difflib import SequenceMatcher
from typing import Callable, Dict, List, NamedTuple, Optional

from .store import ProfileRecord, ProfileStore

__all__ = [
    'RankedCandidate',
    'Ranker',
    'score_terms',
    'score_fuzzy',
    'rank',
    'rank_candidates',
    'FUZZY_THRESHOLD',
]

FUZZY_THRESHOLD = 0.6


class RankedCandidate(NamedTuple):
    profile: ProfileRecord
    score: float


def score_terms(name: str, query: str) -> int:
    """
    Count the query terms found in a profile name.

    Args:
        name: Profile name
        query: Free text query

    Returns:
        Number of query terms that are substrings of the name, compared
        case-insensitively
    """
    name = name.lower()
    return sum(1 for term in query.lower().split() if term in name)


def score_fuzzy(name: str, query: str) -> float:
    """
    Best similarity between the query and any same-length slice of the name.

    Args:
        name: Profile name
        query: Free text query

    Returns:
        Similarity ratio between 0.0 and 1.0
    """
    query = " ".join(query.lower().split())
    name = name.lower()
    if not query:
        return 0.0
    if len(name) <= len(query):
        return SequenceMatcher(None, query, name).ratio()

    best = 0.0
    width = len(query)
    for start in range(len(name) - width + 1):
        ratio = SequenceMatcher(None, query, name[start:start + width]).ratio()
        if ratio > best:
            best = ratio
            if best == 1.0:
                break
    return best


class Ranker:
    """Ranks the profiles of a store against a query with a fixed strategy."""

    STRATEGIES: Dict[str, Callable[[str, str], float]] = {
        "terms": score_terms,
        "fuzzy": score_fuzzy,
    }

    def __init__(self, strategy: str = "terms", threshold: Optional[float] = None):
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown ranking strategy '{strategy}'")
        self.strategy = strategy
        self._score = self.STRATEGIES[strategy]
        if threshold is None:
            threshold = FUZZY_THRESHOLD if strategy == "fuzzy" else 0
        self.threshold = threshold

    def _keeps(self, score: float) -> bool:
        if self.strategy == "terms":
            return score > 0
        return score > 0 and score >= self.threshold

    def rank_candidates(self, store: ProfileStore, query: str) -> List[RankedCandidate]:
        """Score every profile, drop non-matches, order by score then name."""
        if not query or not query.split():
            return []
        candidates = []
        for profile in store:
            score = self._score(profile.name, query)
            if self._keeps(score):
                candidates.append(RankedCandidate(profile, score))
        candidates.sort(key=lambda c: (-c.score, c.profile.name))
        return candidates

    def rank(self, store: ProfileStore, query: str) -> List[ProfileRecord]:
        return [c.profile for c in self.rank_candidates(store, query)]


def rank_candidates(store: ProfileStore, query: str) -> List[RankedCandidate]:
    """Rank with term overlap, keeping the scores."""
    return Ranker().rank_candidates(store, query)


def rank(store: ProfileStore, query: str) -> List[ProfileRecord]:
    """
    Rank profiles by term overlap with the query.

    Args:
        store: Parsed profiles
        query: Free text query; empty means no results

    Returns:
        Matching profiles, highest score first, ties by name ascending
    """
    return Ranker().rank(store, query)
