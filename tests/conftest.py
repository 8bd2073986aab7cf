"""
Shared pytest fixtures for the git-fad test suite.

Usage in tests:
    def test_listing(repo_factory):
        repo_factory.write_file("new.py")
        assert "new.py" in repo_factory.git().list_working_tree_candidates()

    def test_warning_logged(log_messages):
        ...
        assert any("Skipping" in m for m in log_messages)
"""

import pytest
from loguru import logger

from tests.factories import RepoFactory, git_is_available


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop loguru sinks installed during a test (they may hold closed streams)."""
    yield
    logger.remove()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{message}")
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        pass


@pytest.fixture
def repo_factory(tmp_path):
    """
    Create a temporary git repository with one commit (README.md).

    Skips when git is unavailable.
    """
    if not git_is_available():
        pytest.skip("Git is not available")
    return RepoFactory(tmp_path)


@pytest.fixture
def non_git_dir(tmp_path):
    """Create a directory that is not a git repository."""
    d = tmp_path / "not_git"
    d.mkdir()
    return d
