"""
Tokens — Query token classification

A token is either a glob (contains a wildcard metacharacter) or a fuzzy
needle. Classification looks at the token alone.

Fuzzy tokens may hold several atoms ("src main", "^src rs$"); see
parse_atoms(). Globs are never split.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


GLOB_METACHARS = frozenset("*?[")


class TokenKind(Enum):
    """How a token is matched against candidate paths."""
    FUZZY = "fuzzy"
    GLOB = "glob"


@dataclass(frozen=True)
class Token:
    """A single query token."""
    text: str
    kind: TokenKind

    @property
    def is_glob(self) -> bool:
        return self.kind is TokenKind.GLOB


def is_glob_token(text: str) -> bool:
    """Check if token contains a glob wildcard."""
    return any(char in GLOB_METACHARS for char in text)


def classify(text: str) -> Token:
    """Wrap raw token text with its kind."""
    kind = TokenKind.GLOB if is_glob_token(text) else TokenKind.FUZZY
    return Token(text=text, kind=kind)


def split_query(query: str) -> List[str]:
    """
    Split a combined query string into tokens.

    Tokens are separated by whitespace. A backslash before a space keeps
    the space inside the token ("my\\ file" -> "my file").

    Examples:
        split_query("src main rs")   -> ["src", "main", "rs"]
        split_query("a\\ b  c")      -> ["a b", "c"]
    """
    tokens: List[str] = []
    current: List[str] = []
    escaped = False

    for char in query:
        if escaped:
            if char != " ":
                current.append("\\")
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if escaped:
        current.append("\\")
    if current:
        tokens.append("".join(current))

    return tokens


def collect_tokens(args: Iterable[str], query: Optional[str] = None) -> List[str]:
    """
    Assemble the token list from positional arguments and a combined query.

    Positional tokens come first. Empty arguments are dropped.
    """
    tokens = [arg for arg in args if arg]
    if query:
        tokens.extend(split_query(query))
    return tokens


class AtomKind(Enum):
    """How one whitespace-separated part of a fuzzy token matches."""
    FUZZY = "fuzzy"           # foo     subsequence
    SUBSTRING = "substring"   # 'foo    contiguous, anywhere
    PREFIX = "prefix"         # ^foo    path starts with
    POSTFIX = "postfix"       # foo$    path ends with
    EXACT = "exact"           # ^foo$   whole path


@dataclass(frozen=True)
class Atom:
    """One part of a fuzzy token. Negative atoms exclude what they match."""
    text: str
    kind: AtomKind = AtomKind.FUZZY
    negative: bool = False


def parse_atom(text: str) -> Atom:
    """
    Parse fzf-style atom syntax.

    A leading '!' negates, '^' anchors at the start, "'" asks for a
    contiguous match, a trailing '$' anchors at the end. A leading
    backslash (or "\\$" at the end) makes the marker literal. Negated
    atoms never match fuzzily: "!foo" excludes paths containing "foo".
    """
    negative = text.startswith("!")
    if negative:
        text = text[1:]

    kind = AtomKind.FUZZY
    if text.startswith("^"):
        kind = AtomKind.PREFIX
        text = text[1:]
    elif text.startswith("'"):
        kind = AtomKind.SUBSTRING
        text = text[1:]
    elif text.startswith("\\"):
        text = text[1:]

    if text.endswith("\\$"):
        text = text[:-2] + "$"
    elif text.endswith("$"):
        kind = AtomKind.EXACT if kind is AtomKind.PREFIX else AtomKind.POSTFIX
        text = text[:-1]

    if negative and kind is AtomKind.FUZZY:
        kind = AtomKind.SUBSTRING

    return Atom(text=text, kind=kind, negative=negative)


def parse_atoms(token: str) -> List[Atom]:
    """
    Split a fuzzy token into atoms, AND-ed together.

    Atoms are separated by whitespace ("\\ " keeps a space inside an atom).
    Atoms left empty after their markers are dropped.

    Examples:
        parse_atoms("src main")  -> [Atom("src"), Atom("main")]
        parse_atoms("^src rs$")  -> [Atom("src", PREFIX), Atom("rs", POSTFIX)]
    """
    atoms = [parse_atom(part) for part in split_query(token)]
    return [atom for atom in atoms if atom.text]
