"""
Token Matcher — One token against the whole candidate list

Each token picks its own strategy:
- Glob tokens filter (flat score, see core/glob.py)
- Everything else is split into atoms ("src main", "^src", "rs$",
  "'exact", "!not") that are AND-ed and summed (see core/fuzzy.py)

The result is a ScoreMap: candidate ordinal -> score, matches only.
"""

from typing import Dict, Optional, Sequence

from loguru import logger

from ..errors import MalformedPatternError
from .fuzzy import FuzzyMatcher
from .glob import GlobFilter
from .tokens import classify, parse_atoms


ScoreMap = Dict[int, int]


class TokenMatcher:
    """Dispatches tokens to the glob filter or the fuzzy matcher."""

    def __init__(self, fuzzy: Optional[FuzzyMatcher] = None):
        self.fuzzy = fuzzy or FuzzyMatcher()

    def match(self, token: str, candidates: Sequence[str]) -> ScoreMap:
        """
        Match one token against all candidate paths.

        A malformed glob matches nothing.
        """
        if classify(token).is_glob:
            try:
                glob = GlobFilter(token)
            except MalformedPatternError as e:
                logger.debug("Treating token as matching nothing: {}", e)
                return {}
            return glob.match_list(candidates)

        return self.fuzzy.match_atoms(parse_atoms(token), candidates)


def match_token(
    token: str,
    candidates: Sequence[str],
    matcher: Optional[TokenMatcher] = None
) -> ScoreMap:
    """Convenience wrapper around TokenMatcher.match()."""
    return (matcher or TokenMatcher()).match(token, candidates)
