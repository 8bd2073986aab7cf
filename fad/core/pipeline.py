"""
Pipeline — One query run, from candidate paths to a single selection

Candidates -> Token Matcher (per token) -> Aggregator -> Selector

Pure: nothing here touches the repository. Staging is the caller's job
and only happens on a SELECTED outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from loguru import logger

from .aggregator import NoMatchReason, aggregate
from .matcher import TokenMatcher
from .selector import Selection, rank, select


DEBUG_RANK_LIMIT = 5


@dataclass(frozen=True)
class Candidate:
    """A working-tree path; identity is its ordinal in the enumeration."""
    index: int
    path: str


def build_candidates(paths: Sequence[str]) -> List[Candidate]:
    """Assign ordinals to enumerated paths."""
    return [Candidate(index=i, path=path) for i, path in enumerate(paths)]


class QueryStatus(Enum):
    """How a run ended."""
    NO_QUERY = "no_query"
    NO_CANDIDATES = "no_candidates"
    NO_MATCH = "no_match"
    SELECTED = "selected"


@dataclass
class QueryOutcome:
    """Result of run_query()."""
    status: QueryStatus
    tokens: List[str] = field(default_factory=list)
    selection: Optional[Selection] = None
    ranking: List[Selection] = field(default_factory=list)
    failed_token: Optional[str] = None
    reason: Optional[NoMatchReason] = None

    @property
    def selected(self) -> bool:
        return self.status is QueryStatus.SELECTED


def run_query(
    tokens: Sequence[str],
    candidates: Sequence[Candidate],
    matcher: Optional[TokenMatcher] = None
) -> QueryOutcome:
    """
    Select the single best candidate for all tokens.

    Args:
        tokens: Query tokens (AND-ed)
        candidates: Enumerated working-tree candidates
        matcher: Token matcher (default config if None)

    Returns:
        QueryOutcome. The ranking is filled for SELECTED runs.
    """
    tokens = list(tokens)
    if not tokens:
        return QueryOutcome(status=QueryStatus.NO_QUERY)

    if not candidates:
        return QueryOutcome(status=QueryStatus.NO_CANDIDATES, tokens=tokens)

    paths = [candidate.path for candidate in candidates]
    logger.debug("Matching {} token(s) against {} candidate(s)", len(tokens), len(paths))

    result = aggregate(tokens, paths, matcher)
    if not result.matched:
        return QueryOutcome(
            status=QueryStatus.NO_MATCH,
            tokens=tokens,
            failed_token=result.failed_token,
            reason=result.reason
        )

    winner = select(result.scores, paths)
    ranking = rank(result.scores, paths)
    for position, entry in enumerate(ranking[:DEBUG_RANK_LIMIT], 1):
        logger.debug("#{} {} (score={})", position, entry.path, entry.aggregate_score)

    return QueryOutcome(
        status=QueryStatus.SELECTED,
        tokens=tokens,
        selection=Selection(
            index=winner,
            path=paths[winner],
            aggregate_score=result.scores[winner]
        ),
        ranking=ranking
    )
