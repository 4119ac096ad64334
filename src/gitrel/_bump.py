"""Logic for bumping the project version on new releases.

Two version formats are understood, both with an optional alpha suffix of the
form `_NN`:

* Decimal versions (e.g. `0.005` or `1.23`), where the fraction is read in
  groups of three digits (so `0.9` is the same version as `0.900`).
* Dotted versions (e.g. `1.2.3` or `v1.2`), which are any versions with a
  leading 'v' or with more than one dot.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ._constants import MAX_DOTTED_PART
from ._errors import InvalidVersion


VersionKey = Tuple[int, ...]

_VERSION_RE = re.compile(
    r"^(?P<v>v)?(?P<num>[0-9]+(?:\.[0-9]+)*)(?:_(?P<alpha>[0-9]+))?$"
)


def parse_version(version: str) -> Optional[VersionKey]:
    """Returns a key which orders versions by their numeric value.

    Returns:
        A tuple of version components with trailing zeros dropped, or None if
        @version is not a valid version string.
    """
    m = _VERSION_RE.match(version.strip())
    if m is None:
        return None

    num = m.group("num")
    alpha = m.group("alpha")
    if _is_dotted(m.group("v"), num):
        parts = [int(part) for part in num.split(".")]
        if alpha is not None:
            parts.append(int(alpha))
    else:
        whole, _, frac = num.partition(".")
        if alpha is not None:
            frac += alpha

        parts = [int(whole)]
        for i in range(0, len(frac), 3):
            parts.append(int(frac[i : i + 3].ljust(3, "0")))

    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()

    return tuple(parts)


def next_version(version: str) -> str:
    """Increments the least significant component of @version.

    The format of @version is preserved (e.g. '0.005' -> '0.006',
    'v1.2.3' -> 'v1.2.4', '1.23_01' -> '1.23_02').
    """
    m = _VERSION_RE.match(version.strip())
    if m is None:
        raise InvalidVersion(f"Not a valid version string: {version!r}")

    prefix = m.group("v") or ""
    num = m.group("num")
    alpha = m.group("alpha")

    if alpha is not None:
        return f"{prefix}{num}_{_increment_digits(alpha)}"
    elif _is_dotted(prefix, num):
        return prefix + _next_dotted(num)
    else:
        return _next_decimal(num)


def _is_dotted(prefix: Optional[str], num: str) -> bool:
    return bool(prefix) or num.count(".") > 1


def _increment_digits(digits: str) -> str:
    return str(int(digits) + 1).zfill(len(digits))


def _next_decimal(num: str) -> str:
    whole, _, frac = num.partition(".")
    bumped = _increment_digits(whole + frac)
    if not frac:
        return bumped

    return f"{bumped[: -len(frac)]}.{bumped[-len(frac) :]}"


def _next_dotted(num: str) -> str:
    parts: List[int] = [int(part) for part in num.split(".")]
    while len(parts) < 3:
        parts.append(0)

    parts[-1] += 1
    for i in range(len(parts) - 1, 0, -1):
        if parts[i] > MAX_DOTTED_PART:
            parts[i] = 0
            parts[i - 1] += 1

    return ".".join(str(part) for part in parts)
