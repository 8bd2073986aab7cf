"""
Tests for the git-fad command line — main() end to end

These tests validate:
- No query prints usage and exits 0
- Repository failures exit 1 with an error on stderr
- A query stages the winner in a real repository
"""

import pytest

from fad.cli import main, build_parser, FadCLI, USAGE_EXAMPLES
from fad.config import ConfigManager, ENV_OVERRIDES
from fad.core.fuzzy import CaseMatching


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the developer's own config and FAD_* variables out of the run."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "home" / "config.yaml")
    for env_var in list(ENV_OVERRIDES) + ["FAD_PROJECT_PATH"]:
        monkeypatch.delenv(env_var, raising=False)


class TestUsage:

    def test_no_tokens_prints_usage(self, capsys):
        assert main([]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Usage: git-fad <query tokens...>" in captured.err
        for example in USAGE_EXAMPLES:
            assert example in captured.err

    def test_blank_query_prints_usage(self, capsys):
        assert main(["-q", "   "]) == 0
        assert "Usage:" in capsys.readouterr().err

    def test_parser_defaults(self):
        args = build_parser().parse_args(["a", "b"])
        assert args.tokens == ["a", "b"]
        assert args.project == "."
        assert not args.dry_run and not args.explain


class TestErrors:

    def test_not_a_repository(self, non_git_dir, capsys):
        assert main(["-p", str(non_git_dir), "main"]) == 1
        captured = capsys.readouterr()
        assert captured.err.startswith("Error: ")
        assert str(non_git_dir) in captured.err


class TestEndToEnd:

    def test_stages_best_match(self, repo_factory, capsys):
        repo_factory.write_file("src/main.rs")
        repo_factory.write_file("src/git/mod.rs")
        repo_factory.write_file("Cargo.toml")

        assert main(["-p", str(repo_factory.root), "src", "mod"]) == 0

        assert repo_factory.staged_paths() == ["src/git/mod.rs"]
        assert "Staged src/git/mod.rs" in capsys.readouterr().out

    def test_query_string(self, repo_factory):
        repo_factory.write_file("docs/intro.md")
        repo_factory.write_file("docs/setup.md")

        assert main(["-p", str(repo_factory.root), "-q", "docs/*.md setup"]) == 0

        assert repo_factory.staged_paths() == ["docs/setup.md"]

    def test_dry_run_leaves_index_alone(self, repo_factory, capsys):
        repo_factory.write_file("cargo.lock")

        assert main(["-p", str(repo_factory.root), "--dry-run", "--explain", "cargo"]) == 0

        assert repo_factory.staged_paths() == []
        out = capsys.readouterr().out
        assert "Ranked candidates (1):" in out
        assert "Dry run: index not updated" in out

    def test_no_match_exits_zero(self, repo_factory, capsys):
        repo_factory.write_file("a.txt")

        assert main(["-p", str(repo_factory.root), "*.md"]) == 0

        assert repo_factory.staged_paths() == []
        assert "matched nothing" in capsys.readouterr().out

    def test_clean_repository(self, repo_factory, capsys):
        assert main(["-p", str(repo_factory.root), "readme"]) == 0
        assert "No unstaged or untracked files" in capsys.readouterr().out

    def test_modified_file_staged(self, repo_factory):
        repo_factory.commit_file("lib/util.py", "v1")
        repo_factory.write_file("lib/util.py", "v2")

        assert main(["-p", str(repo_factory.root), "util"]) == 0

        assert repo_factory.staged_paths() == ["lib/util.py"]

    def test_project_config_changes_case_policy(self, repo_factory):
        config_dir = repo_factory.root / ".git" / "fad"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("matching:\n  case: respect\n")

        cli = FadCLI(repo_factory.root)

        assert cli.config.matching.case_matching is CaseMatching.RESPECT

    def test_verbose_logs_debug_to_stderr(self, repo_factory, capsys):
        repo_factory.write_file("a.txt")

        assert main(["-v", "-p", str(repo_factory.root), "--dry-run", "a"]) == 0

        err = capsys.readouterr().err
        assert "Running git status" in err
        assert "DEBUG" in err

    def test_quiet_by_default(self, repo_factory, capsys):
        repo_factory.write_file("a.txt")

        assert main(["-p", str(repo_factory.root), "--dry-run", "a"]) == 0

        assert "Running git status" not in capsys.readouterr().err

    def test_log_level_from_config(self, repo_factory, capsys):
        config_dir = repo_factory.root / ".git" / "fad"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("logging:\n  level: debug\n")
        repo_factory.write_file("a.txt")

        assert main(["-p", str(repo_factory.root), "--dry-run", "a"]) == 0

        assert "Running git status" in capsys.readouterr().err

    def test_quoted_multi_word_token(self, repo_factory):
        repo_factory.write_file("src/main.rs")
        repo_factory.write_file("README.txt")

        assert main(["-p", str(repo_factory.root), "src main"]) == 0

        assert repo_factory.staged_paths() == ["src/main.rs"]

    def test_project_config_not_a_candidate(self, repo_factory):
        config_dir = repo_factory.root / ".git" / "fad"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("display:\n  symbols: ascii\n")
        repo_factory.write_file("new.txt")

        assert repo_factory.git().list_working_tree_candidates() == ["new.txt"]
