"""Release plugins that check a git working copy and pick the next version."""

from ._bump import next_version, parse_version
from ._check import RepoChecker, RepositoryState
from ._errors import (
    ConfigError,
    GitError,
    GitrelError,
    InvalidVersion,
    ReleaseBlocked,
)
from ._git import Git, GitClient
from ._next_version import VersionResolver


__all__ = [
    "ConfigError",
    "Git",
    "GitClient",
    "GitError",
    "GitrelError",
    "InvalidVersion",
    "ReleaseBlocked",
    "RepoChecker",
    "RepositoryState",
    "VersionResolver",
    "next_version",
    "parse_version",
]
