"""
Fuzzy — Subsequence scoring tuned for file paths

A needle matches a path when its characters appear in order in the path.
Among all such alignments the best-scoring one is kept:

- Every matched char is worth SCORE_MATCH
- Chars at a boundary (start of a path segment, after whitespace or
  punctuation, camelCase humps, first digit) earn a bonus
- A run of consecutive matches inherits the bonus of its first char
- The bonus of the first needle char counts double
- Gaps between matched chars are penalized (start > extension)

The alignment search is a dynamic program over (needle char, path
position). Scores are non-negative integers; higher is better.

Substring, prefix, postfix and exact atoms (see core/tokens.py) skip the
search and score their contiguous run with the same bonuses.
"""

import sys
import unicodedata
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from .tokens import Atom, AtomKind


SCORE_MATCH = 16
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = BONUS_BOUNDARY
BONUS_CAMEL123 = BONUS_BOUNDARY - PENALTY_GAP_START
BONUS_CONSECUTIVE = PENALTY_GAP_START + PENALTY_GAP_EXTENSION
BONUS_FIRST_CHAR_MULTIPLIER = 2


class CaseMatching(Enum):
    """Case sensitivity policy."""
    IGNORE = "ignore"
    SMART = "smart"      # respect case only if the needle has uppercase
    RESPECT = "respect"


class Normalization(Enum):
    """Unicode folding policy (accents, width variants)."""
    SMART = "smart"      # fold unless the needle itself has foldable chars
    NEVER = "never"


class CharClass(IntEnum):
    """Char categories. Order matters: everything above DELIMITER is a word char."""
    WHITESPACE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


@dataclass(frozen=True)
class MatcherConfig:
    """Bonus tuning. Defaults are tuned for path matching."""
    delimiter_chars: str = "/\\" if sys.platform == "win32" else "/"
    bonus_boundary_white: int = BONUS_BOUNDARY
    bonus_boundary_delimiter: int = BONUS_BOUNDARY + 1
    initial_char_class: CharClass = CharClass.DELIMITER


def fold_char(char: str) -> str:
    """Fold accents and width variants to a single base char."""
    if ord(char) < 128:
        return char
    decomposed = unicodedata.normalize("NFKD", char)
    for base in decomposed:
        if not unicodedata.combining(base):
            return base
    return char


def lower_char(char: str) -> str:
    """Lowercase a char without changing string length."""
    lowered = char.lower()
    return lowered if len(lowered) == 1 else char


class FuzzyMatcher:
    """
    Scores needles against haystacks.

    Holds the bonus configuration and the case/normalization policies.
    Per-haystack bonus tables are cached; the cache is never visible in
    results.
    """

    def __init__(
        self,
        config: Optional[MatcherConfig] = None,
        case: CaseMatching = CaseMatching.IGNORE,
        normalization: Normalization = Normalization.SMART
    ):
        self.config = config or MatcherConfig()
        self.case = case
        self.normalization = normalization
        self._bonus_cache: Dict[str, List[int]] = {}

    # -------------------------------------------------------------------------
    # Preparation
    # -------------------------------------------------------------------------

    def _policies(self, needle: str) -> Tuple[bool, bool]:
        """Resolve (respect_case, normalize) for this needle."""
        if self.case is CaseMatching.RESPECT:
            respect_case = True
        elif self.case is CaseMatching.SMART:
            respect_case = any(char.isupper() for char in needle)
        else:
            respect_case = False

        normalize = (
            self.normalization is Normalization.SMART
            and all(fold_char(char) == char for char in needle)
        )
        return respect_case, normalize

    def _char_class(self, char: str) -> CharClass:
        if char.isspace():
            return CharClass.WHITESPACE
        if char in self.config.delimiter_chars:
            return CharClass.DELIMITER
        if char.islower():
            return CharClass.LOWER
        if char.isupper():
            return CharClass.UPPER
        if char.isdigit():
            return CharClass.NUMBER
        if char.isalpha():
            return CharClass.LETTER
        return CharClass.NON_WORD

    def _bonus_for(self, prev_class: CharClass, char_class: CharClass) -> int:
        if char_class > CharClass.DELIMITER:
            if prev_class is CharClass.WHITESPACE:
                return self.config.bonus_boundary_white
            if prev_class is CharClass.DELIMITER:
                return self.config.bonus_boundary_delimiter
            if prev_class is CharClass.NON_WORD:
                return BONUS_BOUNDARY
        if prev_class is CharClass.LOWER and char_class is CharClass.UPPER:
            return BONUS_CAMEL123
        if prev_class is not CharClass.NUMBER and char_class is CharClass.NUMBER:
            return BONUS_CAMEL123
        if char_class is CharClass.WHITESPACE:
            return self.config.bonus_boundary_white
        if char_class is CharClass.NON_WORD:
            return BONUS_NON_WORD
        return 0

    def _bonuses(self, haystack: str, normalize: bool) -> List[int]:
        key = haystack if normalize else "\0" + haystack
        cached = self._bonus_cache.get(key)
        if cached is not None:
            return cached

        bonuses = []
        prev_class = self.config.initial_char_class
        for char in haystack:
            if normalize:
                char = fold_char(char)
            char_class = self._char_class(char)
            bonuses.append(self._bonus_for(prev_class, char_class))
            prev_class = char_class

        self._bonus_cache[key] = bonuses
        return bonuses

    @staticmethod
    def _transform(text: str, respect_case: bool, normalize: bool) -> str:
        chars = []
        for char in text:
            if normalize:
                char = fold_char(char)
            if not respect_case:
                char = lower_char(char)
            chars.append(char)
        return "".join(chars)

    def _prepare(self, needle: str, haystack: str) -> Tuple[str, str, bool]:
        """Apply the case/normalization policies of needle to both strings."""
        respect_case, normalize = self._policies(needle)
        return (
            self._transform(needle, respect_case, normalize),
            self._transform(haystack, respect_case, normalize),
            normalize
        )

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score(self, needle: str, haystack: str) -> Optional[int]:
        """
        Score needle against haystack.

        Returns:
            Non-negative score, or None when needle is not a subsequence
        """
        if not needle:
            return 0

        pattern, text, normalize = self._prepare(needle, haystack)

        if len(pattern) > len(text):
            return None

        # Earliest feasible position of each needle char
        first: List[int] = []
        pos = 0
        for char in pattern:
            idx = text.find(char, pos)
            if idx < 0:
                return None
            first.append(idx)
            pos = idx + 1

        width = text.rfind(pattern[-1]) + 1
        bonus = self._bonuses(haystack, normalize)
        return self._best_alignment(pattern, text, bonus, first, width)

    def _best_alignment(
        self,
        pattern: str,
        text: str,
        bonus: List[int],
        first: List[int],
        width: int
    ) -> int:
        # row[j]: best score for pattern[:i+1] within text[:j+1]
        # run[j]: length of the consecutive run ending at j (0 if j unmatched)
        row = [0] * width
        run = [0] * width

        in_gap = False
        carried = 0
        for j in range(first[0], width):
            gap = carried - (PENALTY_GAP_EXTENSION if in_gap else PENALTY_GAP_START)
            if text[j] == pattern[0]:
                fresh = SCORE_MATCH + bonus[j] * BONUS_FIRST_CHAR_MULTIPLIER
                if fresh >= gap:
                    row[j], run[j], in_gap = fresh, 1, False
                else:
                    row[j], run[j], in_gap = gap, 0, True
            else:
                row[j], run[j], in_gap = max(gap, 0), 0, True
            carried = row[j]

        for i in range(1, len(pattern)):
            prev_row, prev_run = row, run
            row = [0] * width
            run = [0] * width
            char = pattern[i]
            in_gap = False

            for j in range(first[i], width):
                left = 0
                if j > first[i]:
                    left = row[j - 1] - (PENALTY_GAP_EXTENSION if in_gap else PENALTY_GAP_START)

                diagonal = 0
                consecutive = 0
                if text[j] == char:
                    diagonal = prev_row[j - 1] + SCORE_MATCH
                    char_bonus = bonus[j]
                    consecutive = prev_run[j - 1] + 1
                    if consecutive > 1:
                        run_bonus = bonus[j - consecutive + 1]
                        if char_bonus >= BONUS_BOUNDARY and char_bonus > run_bonus:
                            consecutive = 1
                        else:
                            char_bonus = max(char_bonus, BONUS_CONSECUTIVE, run_bonus)
                    if diagonal + char_bonus < left:
                        diagonal += bonus[j]
                        consecutive = 0
                    else:
                        diagonal += char_bonus

                run[j] = consecutive
                in_gap = diagonal < left
                row[j] = max(diagonal, left, 0)

        return max(row[first[-1]:width])

    @staticmethod
    def _run_score(length: int, bonus: List[int], start: int) -> int:
        """Score of a contiguous match of `length` chars starting at `start`."""
        score = SCORE_MATCH + bonus[start] * BONUS_FIRST_CHAR_MULTIPLIER
        run_start = start
        for j in range(start + 1, start + length):
            char_bonus = bonus[j]
            if char_bonus >= BONUS_BOUNDARY and char_bonus > bonus[run_start]:
                run_start = j
            else:
                char_bonus = max(char_bonus, BONUS_CONSECUTIVE, bonus[run_start])
            score += SCORE_MATCH + char_bonus
        return score

    def score_atom(self, atom: Atom, haystack: str) -> Optional[int]:
        """
        Score one atom against haystack, ignoring its negation.

        Returns:
            Non-negative score, or None when the atom does not match
        """
        if atom.kind is AtomKind.FUZZY:
            return self.score(atom.text, haystack)
        if not atom.text:
            return 0

        pattern, text, normalize = self._prepare(atom.text, haystack)

        if atom.kind is AtomKind.EXACT:
            starts = [0] if text == pattern else []
        elif atom.kind is AtomKind.PREFIX:
            starts = [0] if text.startswith(pattern) else []
        elif atom.kind is AtomKind.POSTFIX:
            starts = [len(text) - len(pattern)] if text.endswith(pattern) else []
        else:
            starts = []
            idx = text.find(pattern)
            while idx >= 0:
                starts.append(idx)
                idx = text.find(pattern, idx + 1)

        if not starts:
            return None

        bonus = self._bonuses(haystack, normalize)
        return max(self._run_score(len(pattern), bonus, start) for start in starts)

    def score_atoms(self, atoms: Sequence[Atom], haystack: str) -> Optional[int]:
        """
        Score all atoms of one token (AND-ed, scores summed).

        A negative atom that matches excludes the haystack and adds nothing
        otherwise. No atoms at all match everything with score 0.
        """
        total = 0
        for atom in atoms:
            score = self.score_atom(atom, haystack)
            if atom.negative:
                if score is not None:
                    return None
                continue
            if score is None:
                return None
            total += score
        return total

    def match_atoms(self, atoms: Sequence[Atom], haystacks: Sequence[str]) -> Dict[int, int]:
        """Like match_list(), for a parsed multi-atom token."""
        scores: Dict[int, int] = {}
        for index, haystack in enumerate(haystacks):
            score = self.score_atoms(atoms, haystack)
            if score is not None:
                scores[index] = score
        return scores

    def match_list(self, needle: str, haystacks: Sequence[str]) -> Dict[int, int]:
        """
        Score needle against every haystack.

        Returns:
            Mapping of haystack index -> score, matches only
        """
        scores: Dict[int, int] = {}
        for index, haystack in enumerate(haystacks):
            score = self.score(needle, haystack)
            if score is not None:
                scores[index] = score
        return scores
