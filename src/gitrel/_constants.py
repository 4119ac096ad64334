"""Contains constant variables."""

from __future__ import annotations

from enum import Enum
from typing import Final


class UntrackedPolicy(str, Enum):
    """What to do about untracked files."""

    DIE = "die"
    WARN = "warn"
    IGNORE = "ignore"


DEFAULT_CHANGELOG: Final = "Changes"
DEFAULT_MANIFEST: Final = "pyproject.toml"
DEFAULT_FIRST_VERSION: Final = "0.001"
DEFAULT_VERSION_REGEXP: Final = r"^v(.+)$"

# Set this environment variable to force an explicit release version.
VERSION_ENV_VAR: Final = "V"

# Prefix of the environment variables that set gitrel options.
ENV_PREFIX: Final = "GITREL_"

# Dotted version components carry over to the next component past this.
MAX_DOTTED_PART: Final = 999

PROJECT_NAME: Final = "gitrel"
