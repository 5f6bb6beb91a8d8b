"""
AWS profile parsing, ranking and selection.
"""

from .store import ProfileRecord, ProfileStore, LastUsedState
from .parser import parse, load_store, is_valid_profile_name, classify_line
from .ranking import Ranker, RankedCandidate, rank, rank_candidates
from .selection import (
    choose_default,
    default_index,
    resolve_from_query,
    finalize,
    Selector
)

__all__ = [
    'ProfileRecord',
    'ProfileStore',
    'LastUsedState',
    'parse',
    'load_store',
    'is_valid_profile_name',
    'classify_line',
    'Ranker',
    'RankedCandidate',
    'rank',
    'rank_candidates',
    'choose_default',
    'default_index',
    'resolve_from_query',
    'finalize',
    'Selector',
]
