"""
CLI -- git-fad command interface

Fuzzy-add: stage the one changed file whose path best matches a query.

    git fad src main          # tokens as separate arguments
    git fad -q "src main"     # or one combined query string
    git fad '*.md' readme     # glob tokens filter, fuzzy tokens rank

Every token must match. Quiet when nothing matches: that is an answer,
not a failure.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .core.fuzzy import FuzzyMatcher
from .core.matcher import TokenMatcher
from .core.pipeline import QueryOutcome
from .core.tokens import collect_tokens
from .commands.add_cmd import AddCommand
from .errors import FadError
from .log import configure_logging
from .presentation.symbols import get_symbols
from .services.git import GitIntegration
from . import __version__


USAGE_EXAMPLES = [
    "cargo",
    "packages book type spec",
    "src main rs",
    "'docs/*.md' intro",
]


class FadCLI:
    """Command-line interface for git-fad."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()

        # Initialize symbols based on config
        self.symbols = get_symbols(self.config.display.symbols)

        # Collaborators: candidate source + stager
        self.git = GitIntegration(self.project_dir)

        # Matcher honours case/normalization preferences
        self.matcher = TokenMatcher(FuzzyMatcher(
            case=self.config.matching.case_matching,
            normalization=self.config.matching.normalization_mode
        ))

        self._add_cmd = AddCommand(self)

    def add(self, tokens: List[str], dry_run: bool = False, explain: bool = False) -> QueryOutcome:
        """Stage the best match for tokens. Delegates to AddCommand."""
        return self._add_cmd.add(tokens, dry_run=dry_run, explain=explain)


def print_usage(prog: str, file=None):
    """Usage with examples (stderr by default)."""
    file = file if file is not None else sys.stderr
    print(f"Usage: {prog} <query tokens...>", file=file)
    print("Examples:", file=file)
    for example in USAGE_EXAMPLES:
        print(f"  {prog} {example}", file=file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-fad",
        description="git-fad -- stage the changed file that best matches a fuzzy query",
        epilog=(
            "All tokens must match. Tokens with * ? [ are globs over the full path. "
            "Other tokens may combine atoms: 'exact ^prefix suffix$ !exclude."
        )
    )

    parser.add_argument(
        'tokens',
        nargs='*',
        help='Query tokens (fuzzy, or glob when they contain * ? [)'
    )

    parser.add_argument(
        '--query', '-q',
        help='Combined query string, split on whitespace (use "\\ " for a literal space)'
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("FAD_PROJECT_PATH", "."),
        help='Repository root (default: FAD_PROJECT_PATH or current directory)'
    )

    parser.add_argument(
        '--dry-run', '-n',
        action='store_true',
        help='Show the best match without staging it'
    )

    parser.add_argument(
        '--explain',
        action='store_true',
        help='List every surviving candidate with its aggregate score'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging on stderr'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'git-fad {__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for git-fad.

    Returns:
        Process exit status: 0 for every outcome including "no match",
        1 when the repository or index cannot be accessed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")

    tokens = collect_tokens(args.tokens, args.query)
    if not tokens:
        print_usage(parser.prog)
        return 0

    try:
        cli = FadCLI(Path(args.project))
        if not args.verbose:
            configure_logging(cli.config.logging.level)
        cli.add(tokens, dry_run=args.dry_run, explain=args.explain)
    except FadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
