"""Utility functions."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class AllowDirtySet:
    """Paths which are allowed to have uncommitted changes.

    A path is allowed if it is equal to one of @paths or if any of the
    regular expressions in @patterns matches it.
    """

    paths: List[str]
    patterns: List[str]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False

        if path in self.paths:
            return True

        return any(re.search(pttrn, path) for pttrn in self.patterns)


def format_listing(header: str, paths: Iterable[str]) -> str:
    """Formats a message followed by one tab-indented line per path."""
    return header + "".join(f"\n\t{path}" for path in paths)


def count_files(n: int, adjective: str) -> str:
    """Returns '1 untracked file', '3 untracked files', etc."""
    return f"{n} {adjective} file{'' if n == 1 else 's'}"


def unique(items: Sequence[str]) -> List[str]:
    """Drops repeated items without changing their order."""
    return list(dict.fromkeys(items))
