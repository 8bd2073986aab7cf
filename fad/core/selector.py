"""
Selector — Pick exactly one winner from the aggregate scores

Total order, highest priority first:
1. Higher aggregate score
2. Shorter path (fewer characters)
3. Lexicographically smaller path
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .matcher import ScoreMap


@dataclass(frozen=True)
class Selection:
    """A ranked candidate."""
    index: int
    path: str
    aggregate_score: int


def ranking_key(index: int, score: int, candidates: Sequence[str]) -> Tuple[int, int, str]:
    """Sort key: ascending key = better candidate."""
    path = candidates[index]
    return (-score, len(path), path)


def rank(cumulative: ScoreMap, candidates: Sequence[str]) -> List[Selection]:
    """All surviving candidates, best first."""
    ordered = sorted(
        cumulative.items(),
        key=lambda item: ranking_key(item[0], item[1], candidates)
    )
    return [
        Selection(index=index, path=candidates[index], aggregate_score=score)
        for index, score in ordered
    ]


def select(cumulative: ScoreMap, candidates: Sequence[str]) -> int:
    """
    Winning ordinal.

    Raises:
        ValueError: If cumulative is empty
    """
    if not cumulative:
        raise ValueError("select() needs at least one scored candidate")
    return min(
        cumulative,
        key=lambda index: ranking_key(index, cumulative[index], candidates)
    )
