"""Contains the VersionResolver class, which provides the release version."""

from __future__ import annotations

import logging
import os
import re
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from ._bump import VersionKey, next_version, parse_version
from ._config import NextConfig
from ._constants import VERSION_ENV_VAR
from ._errors import InvalidVersion, ReleaseBlocked
from ._git import GitClient


logger = logging.getLogger(__name__)


class VersionLogger(Protocol):
    """The logging methods used by VersionResolver."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> Any:
        """Reports progress."""


class VersionResolver:
    """Computes the next release version by bumping the latest release tag.

    The version found in the latest tag matching the 'version_regexp' option
    is incremented using next_version(). Setting the V environment variable
    overrides this (e.g. if the latest tag is v0.005 but you want to jump to
    1.000, run with V=1.000).
    """

    def __init__(
        self,
        git: GitClient,
        cfg: NextConfig,
        *,
        environ: Optional[Mapping[str, str]] = None,
        logger: VersionLogger = logger,
    ) -> None:
        self.git = git
        self.cfg = cfg
        self.environ = os.environ if environ is None else environ
        self.logger = logger

    def resolve(self) -> str:
        """Returns the version that the next release should use."""
        if VERSION_ENV_VAR in self.environ:
            return self.environ[VERSION_ENV_VAR]

        last_version = self.last_version()
        if last_version is None:
            return self.cfg.first_version

        new_version = next_version(last_version)
        self.logger.info(
            "Bumping version from %s to %s", last_version, new_version
        )
        return new_version

    def last_version(self) -> Optional[str]:
        """Returns the highest version found in a release tag (if any).

        Only tags reachable from HEAD are considered when the
        'version_by_branch' option is set.
        """
        merged = "HEAD" if self.cfg.version_by_branch else None
        versions = self._versions_from_tags(self.git.tags(merged=merged))
        if not versions:
            return None
        return versions[-1][1]

    def check_untagged(self, version: str) -> str:
        """Verifies that @version has not been tagged on ANY branch.

        Returns:
            @version, if no release tag contains it.

        Raises:
            InvalidVersion: If @version is not a valid version string.
            ReleaseBlocked: If @version has already been tagged.
        """
        key = parse_version(version)
        if key is None:
            raise InvalidVersion(f"Not a valid version string: {version!r}")

        for other_key, other_version in self._versions_from_tags(
            self.git.tags()
        ):
            if other_key == key:
                raise ReleaseBlocked(
                    f"version {version} has already been tagged (as"
                    f" {other_version})"
                )

        return version

    def _versions_from_tags(
        self, tags: List[str]
    ) -> List[Tuple[VersionKey, str]]:
        pttrn = re.compile(self.cfg.version_regexp)

        versions = []
        for tag in tags:
            if m := pttrn.search(tag):
                version = m.group(1)
                key = parse_version(version)
                if key is not None:
                    versions.append((key, version))

        return sorted(versions)
