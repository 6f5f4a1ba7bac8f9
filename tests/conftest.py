"""Shared test fixtures for docgap."""

import logging
import shutil
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from docgap.config.models import DocGapConfig, RuleConfig
from docgap.vcs.base import VCSBackend
from docgap.vcs.git import GitCommandError
from tests._fixtures.git_repo import GitRepo


@pytest.fixture
def sample_config():
    return DocGapConfig(rules=[RuleConfig(doc="README.md", source="src/**/*.ts")])


@pytest.fixture
def history():
    """path -> commits (newest first); tests fill this in."""
    return {}


@pytest.fixture
def revisions():
    """(path, revision) -> content; missing keys behave like `git show` failing."""
    return {}


@pytest.fixture
def mock_backend(history, revisions):
    backend = MagicMock(spec=VCSBackend)
    backend.is_repository = AsyncMock(return_value=True)

    async def _log(path, follow=False):
        return list(history.get(path, []))

    async def _show(path, revision):
        try:
            return revisions[(path, revision)]
        except KeyError:
            raise GitCommandError(["show", f"{revision}:{path}"], 128, "fatal: path does not exist")

    backend.log = AsyncMock(side_effect=_log)
    backend.show = AsyncMock(side_effect=_show)
    return backend


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    """A real repository in tmp_path; skipped where git is unavailable."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return GitRepo(tmp_path)


@pytest.fixture(autouse=True)
def _reset_docgap_logger():
    """CLI runs reconfigure the docgap logger; restore it so caplog sees records."""
    yield
    logger = logging.getLogger("docgap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
