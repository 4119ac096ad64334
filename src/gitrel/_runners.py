"""Contains the runner functions behind each gitrel subcommand."""

from __future__ import annotations

import logging

import typer

from ._check import RepoChecker
from ._config import CheckConfig, NextConfig
from ._errors import GitrelError, ReleaseBlocked
from ._git import Git
from ._next_version import VersionResolver


logger = logging.getLogger(__name__)


def run_check(cfg: CheckConfig) -> int:
    """Runner for the 'check' subcommand."""
    checker = RepoChecker(Git(cfg.repo_dir), cfg)
    try:
        checker.check()
    except ReleaseBlocked:
        # The reason has already been logged by the checker.
        return 1
    except GitrelError as e:
        logger.error(
            "Unable to check the %s working copy: %s", cfg.repo_dir, e
        )
        return 1

    return 0


def run_next(cfg: NextConfig) -> int:
    """Runner for the 'next' subcommand."""
    resolver = VersionResolver(Git(cfg.repo_dir), cfg)

    if cfg.new_version is not None:
        try:
            version = resolver.check_untagged(cfg.new_version)
        except GitrelError as e:
            logger.error(
                "The %s version cannot be released: %s", cfg.new_version, e
            )
            return 1

        logger.info("Version %s has not been tagged yet.", version)
        return 0

    try:
        version = resolver.resolve()
    except GitrelError as e:
        logger.error("Unable to compute the next version: %s", e)
        return 1

    typer.echo(version)
    return 0
