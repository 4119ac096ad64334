"""Contains the GitClient Protocol and the Git implementation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import re
import subprocess as sp
from typing import (
    TYPE_CHECKING,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

from ._errors import GitError
from ._helpers import unique


if TYPE_CHECKING:
    from ._helpers import AllowDirtySet


logger = logging.getLogger(__name__)


@runtime_checkable
class GitClient(Protocol):
    """The git commands that the release plugins depend on.

    Every query returns the lines printed by git (blank lines removed). Paths
    are returned verbatim (i.e. never C-quoted).
    """

    def branch(self) -> List[str]:
        """Lists local branches. The current branch is prefixed by '* '."""

    def diff(
        self, *, cached: bool = False, name_status: bool = False
    ) -> List[str]:
        """Lists the changes in the working copy (or the index)."""

    def ls_files(
        self,
        *,
        others: bool = False,
        exclude_standard: bool = False,
        modified: bool = False,
        deleted: bool = False,
    ) -> List[str]:
        """Lists files in the working copy."""

    def add(self, path: str) -> None:
        """Adds @path to the index."""

    def tags(self, *, merged: Optional[str] = None) -> List[str]:
        """Lists tags, optionally only those reachable from @merged."""


class Git:
    """GitClient that runs the git binary against a working copy."""

    def __init__(self, repo_dir: Union[str, os.PathLike] = ".") -> None:
        self.repo_dir = Path(repo_dir)

    def branch(self) -> List[str]:
        return self._git("branch")

    def diff(
        self, *, cached: bool = False, name_status: bool = False
    ) -> List[str]:
        args = ["diff"]
        if cached:
            args.append("--cached")
        if name_status:
            args.append("--name-status")
        return self._git(*args)

    def ls_files(
        self,
        *,
        others: bool = False,
        exclude_standard: bool = False,
        modified: bool = False,
        deleted: bool = False,
    ) -> List[str]:
        # -z turns off path quoting, even for names with newlines in them.
        args = ["ls-files", "-z"]
        if others:
            args.append("--others")
        if exclude_standard:
            args.append("--exclude-standard")
        if modified:
            args.append("--modified")
        if deleted:
            args.append("--deleted")
        return self._git(*args, sep="\0")

    def add(self, path: str) -> None:
        self._git("add", "--", path)

    def tags(self, *, merged: Optional[str] = None) -> List[str]:
        args = ["tag"]
        if merged is not None:
            args.extend(["--merged", merged])
        return self._git(*args)

    def _git(self, *args: str, sep: str = "\n") -> List[str]:
        cmd_list = [
            "git",
            "-c",
            "core.quotePath=false",
            "-C",
            str(self.repo_dir),
            *args,
        ]
        logger.debug("Running git command: %r", cmd_list)
        ps = sp.run(
            cmd_list,
            capture_output=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
        if ps.returncode != 0:
            raise GitError(cmd_list, ps.returncode, ps.stderr)
        if sep == "\0":
            return [path for path in ps.stdout.split(sep) if path]
        return [line for line in ps.stdout.split(sep) if line.strip()]


def current_branch(git: GitClient) -> str:
    """Returns the name of the checked out branch.

    An empty string is returned when git lists no branches at all (e.g. in a
    repository without any commits).
    """
    for line in git.branch():
        if m := re.match(r"^\*\s+(.+)", line):
            return m.group(1)
    return ""


def list_dirty_files(git: GitClient, allowed: AllowDirtySet) -> List[str]:
    """Returns the modified (or deleted) tracked files that are NOT allowed."""
    return [
        path
        for path in unique(git.ls_files(modified=True, deleted=True))
        if path not in allowed
    ]
