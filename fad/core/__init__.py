"""
Core — The ranking pipeline

- tokens: glob vs fuzzy classification, query splitting
- fuzzy: path-tuned subsequence scoring
- glob: full-path pattern filter
- matcher: one token -> ScoreMap
- aggregator: AND-fold of ScoreMaps
- selector: total order over survivors
- pipeline: one query run end to end
"""

from .tokens import (
    Token, TokenKind, Atom, AtomKind, classify, is_glob_token,
    split_query, collect_tokens, parse_atom, parse_atoms
)
from .fuzzy import FuzzyMatcher, MatcherConfig, CaseMatching, Normalization
from .glob import GlobFilter, compile_glob, GLOB_SCORE
from .matcher import TokenMatcher, ScoreMap, match_token
from .aggregator import AggregateResult, NoMatchReason, aggregate, intersect_sum
from .selector import Selection, rank, select, ranking_key
from .pipeline import Candidate, QueryOutcome, QueryStatus, build_candidates, run_query

__all__ = [
    'Token', 'TokenKind', 'Atom', 'AtomKind', 'classify', 'is_glob_token',
    'split_query', 'collect_tokens', 'parse_atom', 'parse_atoms',
    'FuzzyMatcher', 'MatcherConfig', 'CaseMatching', 'Normalization',
    'GlobFilter', 'compile_glob', 'GLOB_SCORE',
    'TokenMatcher', 'ScoreMap', 'match_token',
    'AggregateResult', 'NoMatchReason', 'aggregate', 'intersect_sum',
    'Selection', 'rank', 'select', 'ranking_key',
    'Candidate', 'QueryOutcome', 'QueryStatus', 'build_candidates', 'run_query',
]
