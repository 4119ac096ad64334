"""Custom exception types raised by the release plugins."""

from __future__ import annotations


class GitrelError(Exception):
    """Base exception for gitrel errors."""


class ReleaseBlocked(GitrelError):
    """The working copy (or requested version) is not fit for a release."""


class GitError(GitrelError):
    """A git command failed."""

    def __init__(self, cmd_list: list[str], returncode: int, stderr: str):
        self.cmd_list = cmd_list
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"The {' '.join(cmd_list)!r} command failed with exit code"
            f" {returncode}: {stderr.strip()}"
        )


class InvalidVersion(GitrelError, ValueError):
    """A string that cannot be parsed as a version."""


class ConfigError(GitrelError):
    """The configuration (file or options) is not valid."""
