"""
Aggregator — Fold per-token score maps into one

Tokens are AND-ed: a candidate survives only if every token matched it,
and its aggregate score is the sum of its per-token scores.

The fold stops at the first token that leaves nothing standing, either
because the token matched nothing at all or because its matches did not
overlap the survivors so far. Later tokens are never evaluated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from loguru import logger

from .matcher import ScoreMap, TokenMatcher


class NoMatchReason(Enum):
    """Why the fold ended empty."""
    TOKEN_UNMATCHED = "token_unmatched"   # token matched no candidate
    ELIMINATED = "eliminated"             # intersection with survivors emptied


@dataclass
class AggregateResult:
    """Outcome of folding all tokens."""
    scores: ScoreMap = field(default_factory=dict)
    failed_token: Optional[str] = None
    reason: Optional[NoMatchReason] = None
    # Survivor count after each evaluated token
    survivors: List[int] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.scores)


def intersect_sum(cumulative: ScoreMap, token_scores: ScoreMap) -> ScoreMap:
    """Keep keys present in both maps, summing their scores."""
    return {
        index: score + token_scores[index]
        for index, score in cumulative.items()
        if index in token_scores
    }


def aggregate(
    tokens: Sequence[str],
    candidates: Sequence[str],
    matcher: Optional[TokenMatcher] = None
) -> AggregateResult:
    """
    Fold every token's ScoreMap into a cumulative one.

    Args:
        tokens: Query tokens, in order
        candidates: Candidate paths (index = ordinal)
        matcher: Token matcher to use (default config if None)

    Returns:
        AggregateResult. Empty scores mean no match; failed_token and
        reason say where and why the fold stopped.
    """
    matcher = matcher or TokenMatcher()
    result = AggregateResult()
    cumulative: Optional[ScoreMap] = None

    for token in tokens:
        token_scores = matcher.match(token, candidates)
        logger.debug("Token '{}' matched {} candidate(s)", token, len(token_scores))

        if not token_scores:
            return AggregateResult(
                failed_token=token,
                reason=NoMatchReason.TOKEN_UNMATCHED,
                survivors=result.survivors + [0]
            )

        if cumulative is None:
            cumulative = dict(token_scores)
        else:
            cumulative = intersect_sum(cumulative, token_scores)

        result.survivors.append(len(cumulative))
        logger.debug("{} candidate(s) survive after '{}'", len(cumulative), token)
        if not cumulative:
            return AggregateResult(
                failed_token=token,
                reason=NoMatchReason.ELIMINATED,
                survivors=result.survivors
            )

    result.scores = cumulative or {}
    return result
