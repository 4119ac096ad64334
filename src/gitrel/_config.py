"""Configuration classes for the gitrel commands.

Options are layered: command-line options override the YAML config file given
by --config, which overrides GITREL_* environment variables, which override
the defaults defined below.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Any, List, Optional, Type, TypeVar

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from ._constants import (
    DEFAULT_CHANGELOG,
    DEFAULT_FIRST_VERSION,
    DEFAULT_MANIFEST,
    DEFAULT_VERSION_REGEXP,
    ENV_PREFIX,
    UntrackedPolicy,
)
from ._errors import ConfigError
from ._helpers import AllowDirtySet


Config_T = TypeVar("Config_T", bound="Config")


class Config(BaseSettings):
    """Base configuration class."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    repo_dir: Path = Path(".")


class CheckConfig(Config):
    """Config for the 'check' subcommand."""

    add_files_allowed_to_be_dirty_if_untracked: bool = False
    allow_dirty: Optional[List[str]] = None
    allow_dirty_match: List[str] = []
    changelog: str = DEFAULT_CHANGELOG
    manifest: str = DEFAULT_MANIFEST
    untracked_files: UntrackedPolicy = UntrackedPolicy.DIE

    @property
    def allow_dirty_set(self) -> AllowDirtySet:
        """The files which are allowed to have uncommitted changes.

        Defaults to the changelog and manifest files. Setting 'allow_dirty'
        replaces these defaults (empty entries are ignored, so a single empty
        entry forbids ALL local modifications).
        """
        if self.allow_dirty is None:
            paths = [self.changelog, self.manifest]
        else:
            paths = [path for path in self.allow_dirty if path]
        return AllowDirtySet(paths, list(self.allow_dirty_match))


class NextConfig(Config):
    """Config for the 'next' subcommand."""

    first_version: str = DEFAULT_FIRST_VERSION
    new_version: Optional[str] = None
    version_by_branch: bool = False
    version_regexp: str = DEFAULT_VERSION_REGEXP

    @field_validator("version_regexp")
    @classmethod
    def _check_version_regexp(cls, value: str) -> str:
        try:
            pttrn = re.compile(value)
        except re.error as e:
            raise ValueError(f"not a valid regular expression: {e}") from e

        if pttrn.groups < 1:
            raise ValueError(
                "the version MUST be captured by a group (e.g. '^v(.+)$')"
            )
        return value


def load_config(
    config_cls: Type[Config_T],
    config_file: Optional[Path] = None,
    **options: Any,
) -> Config_T:
    """Builds a @config_cls object from the config file and CLI options.

    Options whose value is None (i.e. that were not given on the command
    line) do not override the config file or environment.
    """
    data: dict[str, Any] = {}
    if config_file is not None:
        try:
            loaded = yaml.safe_load(config_file.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Unable to read the {config_file} config file: {e}"
            ) from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(
                f"The {config_file} config file must contain a mapping of"
                " option names to values."
            )
        data.update(loaded or {})

    data.update({k: v for (k, v) in options.items() if v is not None})

    try:
        return config_cls(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
