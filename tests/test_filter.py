"""Tests for docgap.vcs.filter - conventional-commit and user-pattern noise."""

import pytest

from docgap.errors import DriftError, ErrorKind
from docgap.vcs.filter import (
    NOISE_PATTERN,
    compile_ignore_patterns,
    filter_meaningful_commits,
    is_noise,
)
from tests._fixtures.git_repo import make_commit


def _commits(*messages: str):
    return [
        make_commit(msg, f"2023-01-{i + 1:02d}T00:00:00+00:00", sha=f"c{i}")
        for i, msg in enumerate(messages)
    ]


# ── Built-in noise ──────────────────────────────────────────────────


class TestBuiltinNoise:
    @pytest.mark.parametrize(
        "message",
        [
            "chore: bump deps",
            "style: fix lint",
            "test: add cases",
            "ci: cache pip",
            "build: switch to hatch",
            "chore(deps): bump pydantic",
            "CHORE: shouting",
            "Style(api): reformat",
        ],
    )
    def test_conventional_noise_is_filtered(self, message):
        assert NOISE_PATTERN.search(message)
        assert filter_meaningful_commits(_commits(message)) == []

    @pytest.mark.parametrize(
        "message",
        [
            "feat: add login",
            "fix: off by one",
            "refactor: extract helper",
            "docs: explain flags",
            "update chore: list",  # not anchored at the start
            "chores: plural is not a type",
        ],
    )
    def test_meaningful_commits_survive(self, message):
        assert len(filter_meaningful_commits(_commits(message))) == 1

    def test_order_and_multiplicity_preserved(self):
        commits = _commits("feat: a", "chore: x", "feat: a", "fix: b", "style: y", "feat: c")
        kept = filter_meaningful_commits(commits)
        assert [c.message for c in kept] == ["feat: a", "feat: a", "fix: b", "feat: c"]
        assert [c.hash for c in kept] == ["c0", "c2", "c3", "c5"]

    def test_empty_input(self):
        assert filter_meaningful_commits([]) == []


# ── User patterns ───────────────────────────────────────────────────


class TestUserPatterns:
    def test_any_user_pattern_excludes(self):
        commits = _commits("docs: typo", "feat: real", "WIP tweak", "Merge branch 'main'")
        kept = filter_meaningful_commits(commits, ["^docs:", "WIP", r"^Merge branch"])
        assert [c.message for c in kept] == ["feat: real"]

    def test_user_patterns_are_case_sensitive_by_default(self):
        kept = filter_meaningful_commits(_commits("Docs: capital"), ["^docs:"])
        assert len(kept) == 1

    def test_inline_flag_allows_case_insensitive(self):
        kept = filter_meaningful_commits(_commits("Docs: capital"), ["(?i)^docs:"])
        assert kept == []

    def test_no_output_commit_matches_any_pattern(self):
        patterns = ["^docs:", "skip"]
        commits = _commits(
            "feat: one", "docs: two", "chore: three", "fix: skip this", "perf: five", "ci: six"
        )
        kept = filter_meaningful_commits(commits, patterns)
        for c in kept:
            assert not is_noise(c.message, compile_ignore_patterns(patterns))
        # every non-matching commit is still there
        assert {c.message for c in kept} == {"feat: one", "perf: five"}

    def test_invalid_pattern_raises(self):
        with pytest.raises(DriftError) as exc_info:
            filter_meaningful_commits(_commits("feat: x"), ["(unclosed"])
        assert exc_info.value.kind is ErrorKind.INVALID_PATTERN
        assert exc_info.value.__cause__ is not None

    def test_invalid_pattern_fails_even_with_no_commits(self):
        with pytest.raises(DriftError) as exc_info:
            filter_meaningful_commits([], ["[bad"])
        assert exc_info.value.kind is ErrorKind.INVALID_PATTERN

    def test_input_list_untouched(self):
        commits = _commits("chore: x", "feat: y")
        before = list(commits)
        filter_meaningful_commits(commits, ["feat"])
        assert commits == before
