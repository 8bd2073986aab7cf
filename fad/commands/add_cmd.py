"""
AddCommand — Fuzzy-select one changed file and stage it

Flow: list candidates -> run the ranking pipeline -> stage the winner.
The index is only touched after a single winner is final.

"Nothing found" outcomes are informational and not errors.
"""

from typing import List

from ..commands.base import BaseCommand
from ..core.aggregator import NoMatchReason
from ..core.pipeline import QueryOutcome, QueryStatus, build_candidates, run_query
from ..presentation.symbols import safe_print


class AddCommand(BaseCommand):
    """Command that stages the best match for a fuzzy query."""

    def add(self, tokens: List[str], dry_run: bool = False, explain: bool = False) -> QueryOutcome:
        """
        Select and stage the working-tree file that best matches all tokens.

        Args:
            tokens: Query tokens (AND-ed)
            dry_run: Report the winner without staging it
            explain: Print every surviving candidate in rank order

        Returns:
            The QueryOutcome of the run

        Raises:
            RepositoryAccessError: If the working tree cannot be read
            PathOutsideRepositoryError, IndexWriteError: If staging fails
        """
        if not tokens:
            return QueryOutcome(status=QueryStatus.NO_QUERY)

        paths = self.git.list_working_tree_candidates()
        outcome = run_query(tokens, build_candidates(paths), self.matcher)

        if outcome.status is QueryStatus.NO_CANDIDATES:
            safe_print(f"No unstaged or untracked files found in repository {self.project_dir.resolve()}")
        elif outcome.status is QueryStatus.NO_MATCH:
            self._report_no_match(outcome)
        elif outcome.status is QueryStatus.SELECTED:
            if explain:
                self._print_ranking(outcome)
            self._report_and_stage(outcome, dry_run)

        return outcome

    def _report_no_match(self, outcome: QueryOutcome):
        if outcome.reason is NoMatchReason.TOKEN_UNMATCHED:
            safe_print(f"No matches (token '{outcome.failed_token}' matched nothing)")
        else:
            safe_print(
                f"No matches after applying tokens: {' '.join(outcome.tokens)} "
                f"(token '{outcome.failed_token}' eliminated the remaining candidates)"
            )

    def _print_ranking(self, outcome: QueryOutcome):
        symbols = self.symbols
        print(f"Ranked candidates ({len(outcome.ranking)}):")
        for entry in outcome.ranking:
            safe_print(f"  {symbols.bullet} {entry.aggregate_score:>5}  {entry.path}")

    def _report_and_stage(self, outcome: QueryOutcome, dry_run: bool):
        best = outcome.selection
        safe_print(
            f"Best match: {best.path} "
            f"(aggregate_score={best.aggregate_score}, tokens={'+'.join(outcome.tokens)})"
        )

        if dry_run:
            print("Dry run: index not updated")
            return

        staged = self.git.stage(best.path)
        safe_print(f"{self.symbols.check_pass} Staged {staged.as_posix()}")
