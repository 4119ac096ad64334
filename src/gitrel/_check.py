"""Contains the RepoChecker class, which runs before every release.

The following must be true before a release is allowed:

* There are no changes staged for commit.
* There are no uncommitted changes to tracked files, except to the files that
  are allowed to be dirty (see the 'allow_dirty' option).
* There are no untracked files (unless the 'untracked_files' option is set to
  'warn' or 'ignore').
"""

from __future__ import annotations

import logging
from typing import Any, List, NoReturn, Protocol

from pydantic.dataclasses import dataclass

from ._config import CheckConfig
from ._constants import UntrackedPolicy
from ._errors import ReleaseBlocked
from ._git import GitClient, current_branch, list_dirty_files
from ._helpers import count_files, format_listing


logger = logging.getLogger(__name__)


class CheckLogger(Protocol):
    """The logging methods used by RepoChecker."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        """Reports progress."""

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        """Reports a problem that does NOT block the release."""

    def error(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        """Reports a problem that blocks the release."""


@dataclass(frozen=True)
class RepositoryState:
    """The state of a working copy that has passed the release checks."""

    branch: str
    staged: List[str]
    dirty: List[str]
    untracked: List[str]
    added: List[str]


class RepoChecker:
    """Checks that a git working copy is clean enough to release from."""

    def __init__(
        self, git: GitClient, cfg: CheckConfig, logger: CheckLogger = logger
    ) -> None:
        self.git = git
        self.cfg = cfg
        self.logger = logger

    def check(self) -> RepositoryState:
        """Runs every release check.

        Raises:
            ReleaseBlocked: As soon as a check fails. The reason has already
                been logged as an error by then.
        """
        git = self.git
        allowed = self.cfg.allow_dirty_set
        branch = current_branch(git)
        issues: List[str] = []

        staged = git.diff(cached=True, name_status=True)
        if staged:
            self._fatal(
                format_listing(
                    f"branch {branch} has some changes staged for commit:",
                    staged,
                )
            )

        dirty = list_dirty_files(git, allowed)
        if dirty:
            self._fatal(
                format_listing(
                    f"branch {branch} has some uncommitted files:", dirty
                )
            )

        untracked = git.ls_files(others=True, exclude_standard=True)
        added: List[str] = []
        if self.cfg.add_files_allowed_to_be_dirty_if_untracked:
            added = [path for path in untracked if path in allowed]
            for path in added:
                self.logger.info("Adding untracked file: %s", path)
                git.add(path)

            untracked = [path for path in untracked if path not in allowed]

        if untracked:
            issues.append(count_files(len(untracked), "untracked"))

            policy = self.cfg.untracked_files
            errmsg = format_listing(
                f"branch {branch} has some untracked files:", untracked
            )
            if policy == UntrackedPolicy.DIE:
                self._fatal(errmsg)
            elif policy == UntrackedPolicy.WARN:
                self.logger.warning(errmsg)

        if issues:
            self.logger.info("branch %s has %s", branch, ", ".join(issues))
        else:
            self.logger.info("branch %s is in a clean state", branch)

        return RepositoryState(branch, [], [], untracked, added)

    def _fatal(self, errmsg: str) -> NoReturn:
        self.logger.error(errmsg)
        raise ReleaseBlocked(errmsg)
