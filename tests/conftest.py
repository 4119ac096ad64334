"""This file contains shared fixtures and pytest hooks.

https://docs.pytest.org/en/6.2.x/fixture.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import subprocess as sp
from typing import Any, Callable, List, Optional, Tuple

from pytest import fixture


@dataclass
class FakeGit:
    """In-memory GitClient."""

    branches: List[str] = field(default_factory=lambda: ["* main"])
    staged: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    all_tags: List[str] = field(default_factory=list)
    merged_tags: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)

    def branch(self) -> List[str]:
        return list(self.branches)

    def diff(
        self, *, cached: bool = False, name_status: bool = False
    ) -> List[str]:
        del name_status
        return list(self.staged) if cached else list(self.modified)

    def ls_files(
        self,
        *,
        others: bool = False,
        exclude_standard: bool = False,
        modified: bool = False,
        deleted: bool = False,
    ) -> List[str]:
        del exclude_standard
        if others:
            return list(self.untracked)
        if modified or deleted:
            return list(self.modified)
        return []

    def add(self, path: str) -> None:
        self.added.append(path)

    def tags(self, *, merged: Optional[str] = None) -> List[str]:
        if merged is None:
            return list(self.all_tags)
        return list(self.merged_tags)


class RecordingLogger:
    """Logger that remembers every (level, message) pair."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", msg, args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, args)

    def messages(self, level: str) -> List[str]:
        """Returns the messages that were logged at the given level."""
        return [msg for (lvl, msg) in self.records if lvl == level]

    def _record(self, level: str, msg: str, args: Tuple[Any, ...]) -> None:
        self.records.append((level, msg % args if args else msg))


@fixture(name="git")
def git_fixture() -> FakeGit:
    """A fake git working copy that is in a clean state."""
    return FakeGit()


@fixture(name="log")
def log_fixture() -> RecordingLogger:
    """A logger that records every message."""
    return RecordingLogger()


def _run_git(repo: Path, *args: str) -> str:
    """Runs a git command in the @repo working copy."""
    ps = sp.run(
        [
            "git",
            "-c",
            "user.name=Test User",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
        encoding="utf-8",
    )
    return ps.stdout


@fixture(name="run_git")
def run_git_fixture() -> Callable[..., str]:
    """Returns a function that runs git commands in a working copy."""
    return _run_git


@fixture(name="repo")
def repo_fixture(tmp_path: Path) -> Path:
    """A real git repository with a single commit, tagged as v0.005."""
    result = tmp_path / "repo"
    result.mkdir()

    _run_git(result, "init", "-q")
    _run_git(result, "symbolic-ref", "HEAD", "refs/heads/main")

    (result / "Changes").write_text("0.005 - first release\n")
    (result / "pyproject.toml").write_text("[project]\nname = 'foo'\n")
    (result / "foo.py").write_text("print('foo')\n")
    _run_git(result, "add", "Changes", "pyproject.toml", "foo.py")
    _run_git(result, "commit", "-q", "-m", "Initial commit.")
    _run_git(result, "tag", "v0.005")

    return result
