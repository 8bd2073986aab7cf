"""
git-fad — Fuzzy add for git

Stages the single unstaged or untracked file whose path best matches
every query token.

Usage:
    git fad cargo
    git fad src main rs
    git fad -q "packages book type spec"
    git fad '*.md' readme
    git fad --dry-run --explain src mod
"""

__version__ = "0.1.0"

# Core layer (ranking)
from .core.tokens import Token, TokenKind, Atom, AtomKind, classify, split_query, collect_tokens, parse_atoms
from .core.fuzzy import FuzzyMatcher, MatcherConfig, CaseMatching, Normalization
from .core.matcher import TokenMatcher, match_token
from .core.aggregator import AggregateResult, NoMatchReason, aggregate
from .core.selector import Selection, rank, select
from .core.pipeline import Candidate, QueryOutcome, QueryStatus, build_candidates, run_query

# Services layer
from .services.git import GitIntegration, WorkingTreeEntry

# Errors
from .errors import (
    FadError, RepositoryAccessError, PathOutsideRepositoryError,
    IndexWriteError, MalformedPatternError
)

# Config (stays at root)
from .config import Config, ConfigManager, get_config

__all__ = [
    # Core
    'Token', 'TokenKind', 'Atom', 'AtomKind', 'classify', 'split_query', 'collect_tokens', 'parse_atoms',
    'FuzzyMatcher', 'MatcherConfig', 'CaseMatching', 'Normalization',
    'TokenMatcher', 'match_token',
    'AggregateResult', 'NoMatchReason', 'aggregate',
    'Selection', 'rank', 'select',
    'Candidate', 'QueryOutcome', 'QueryStatus', 'build_candidates', 'run_query',
    # Services
    'GitIntegration', 'WorkingTreeEntry',
    # Errors
    'FadError', 'RepositoryAccessError', 'PathOutsideRepositoryError',
    'IndexWriteError', 'MalformedPatternError',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
