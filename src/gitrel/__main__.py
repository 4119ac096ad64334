"""Contains the gitrel command-line interface.

This is used by setuptools as the main entry point for this program.

Examples:
    # Exits with a non-zero exit code if the working copy is not clean.
    gitrel check

    # Allow README.md and any file under docs/ to have local modifications.
    gitrel check -a README.md -A '^docs/'

    # Print the next version, computed from the latest 'vX.Y.Z' git tag.
    gitrel next

    # Force an explicit version.
    V=1.000 gitrel next

    # Fail if the 0.006 version has already been tagged (on ANY branch).
    gitrel next --by-branch --check 0.006
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Type

import typer

from ._config import CheckConfig, Config, NextConfig, load_config
from ._constants import PROJECT_NAME, UntrackedPolicy
from ._errors import ConfigError
from ._runners import run_check, run_next


logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Release plugins that inspect the state of a git working copy.",
    add_completion=False,
)


@app.callback()
def _init(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML file containing default values for any gitrel option.",
    ),
    repo_dir: Optional[Path] = typer.Option(
        None,
        "-C",
        "--repo-dir",
        help=(
            "Path to the git working copy that we should inspect. Defaults"
            " to the current directory."
        ),
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Log the git commands that are run."
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    ctx.obj = {"config_file": config_file, "repo_dir": repo_dir}


@app.command(name="check")
def check(
    ctx: typer.Context,
    allow_dirty: Optional[List[str]] = typer.Option(
        None,
        "-a",
        "--allow-dirty",
        help=(
            "A file that is allowed to have local modifications. This option"
            " can be given multiple times. Defaults to the changelog and"
            " manifest files. Use `--allow-dirty ''` to prohibit ALL local"
            " modifications."
        ),
    ),
    allow_dirty_match: Optional[List[str]] = typer.Option(
        None,
        "-A",
        "--allow-dirty-match",
        help=(
            "A regular expression matching files that are allowed to have"
            " local modifications. This option can be given multiple times."
        ),
    ),
    changelog: Optional[str] = typer.Option(
        None,
        "--changelog",
        help="The name of your changelog file. Defaults to 'Changes'.",
    ),
    manifest: Optional[str] = typer.Option(
        None,
        "--manifest",
        help=(
            "The name of your project manifest file. Defaults to"
            " 'pyproject.toml'."
        ),
    ),
    untracked_files: Optional[UntrackedPolicy] = typer.Option(
        None,
        "-u",
        "--untracked-files",
        help=(
            "What to do if there are untracked files. The 'warn' policy lists"
            " the untracked files, while 'ignore' only reports how many there"
            " are. Defaults to 'die'."
        ),
    ),
    add_untracked: Optional[bool] = typer.Option(
        None,
        "--add-untracked/--no-add-untracked",
        help=(
            "If an untracked file is allowed to be dirty, add it using"
            " `git add` instead of treating it as an untracked file."
        ),
    ),
) -> None:
    """Verify that the git working copy is clean enough to release from."""
    cfg = _load_config(
        ctx,
        CheckConfig,
        add_files_allowed_to_be_dirty_if_untracked=add_untracked,
        allow_dirty=allow_dirty,
        allow_dirty_match=allow_dirty_match,
        changelog=changelog,
        manifest=manifest,
        untracked_files=untracked_files,
    )
    raise typer.Exit(code=run_check(cfg))


@app.command(name="next")
def next_(
    ctx: typer.Context,
    first_version: Optional[str] = typer.Option(
        None,
        "-f",
        "--first-version",
        help=(
            "The version to use if the repository has no release tags yet."
            " Defaults to '0.001'."
        ),
    ),
    version_regexp: Optional[str] = typer.Option(
        None,
        "-r",
        "--version-regexp",
        help=(
            "A regular expression that matches release tags. The version MUST"
            " be captured by the first group. Defaults to '^v(.+)$'."
        ),
    ),
    version_by_branch: Optional[bool] = typer.Option(
        None,
        "--by-branch/--all-branches",
        help=(
            "Only consider release tags that are reachable from the"
            " currently checked out commit."
        ),
    ),
    new_version: Optional[str] = typer.Option(
        None,
        "-c",
        "--check",
        metavar="VERSION",
        help=(
            "Instead of printing the next version, verify that VERSION has"
            " not already been tagged."
        ),
    ),
) -> None:
    """Print the next release version (the latest release tag, bumped)."""
    cfg = _load_config(
        ctx,
        NextConfig,
        first_version=first_version,
        new_version=new_version,
        version_by_branch=version_by_branch,
        version_regexp=version_regexp,
    )
    raise typer.Exit(code=run_next(cfg))


def _load_config(
    ctx: typer.Context, config_cls: Type[Config], **options: Any
) -> Any:
    try:
        return load_config(
            config_cls,
            ctx.obj["config_file"],
            repo_dir=ctx.obj["repo_dir"],
            **options,
        )
    except ConfigError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e


def main() -> None:
    """Runs the gitrel command-line interface."""
    app(prog_name=PROJECT_NAME)


if __name__ == "__main__":
    main()
