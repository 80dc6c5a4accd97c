"""Path parameter parsing with silent fallback."""

from __future__ import annotations

import re
from typing import Callable

_INT_RE = re.compile(r"[+-]?[0-9]+")


def is_positive(value: int) -> bool:
    return value >= 1


def parse_with_default(
    value: str | None,
    default: int,
    predicate: Callable[[int], bool] = is_positive,
) -> int:
    """Parse ``value`` as a base-10 integer, falling back to ``default``.

    The fallback applies when the value is missing, is not an integer, or
    fails ``predicate``. Nothing is raised.
    """
    if value is None or not _INT_RE.fullmatch(value):
        return default
    parsed = int(value)
    return parsed if predicate(parsed) else default
