"""Name legality and array-range checks."""

from __future__ import annotations

import re
from enum import Enum


class NameCheck(Enum):
    OK = "ok"
    MALFORMED = "malformed"
    TOO_LONG = "too-long"


class RangeCheck(Enum):
    OK = "ok"
    MALFORMED = "malformed"
    OUT_OF_RANGE = "out-of-range"


_RANGE = re.compile(r"(\d+)-(\d+)(?::(\d+))?", re.ASCII)
_RESOURCE_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


def check_job_name(value: str, allow_numeric_leading: bool, max_len: int) -> NameCheck:
    """Job and reservation names: printable, no ``@``, bounded length.

    Unless ``allow_numeric_leading``, the first character must be a letter.
    """
    if len(value) > max_len:
        return NameCheck.TOO_LONG
    if not value.isprintable() or "@" in value:
        return NameCheck.MALFORMED
    if not allow_numeric_leading and not value[:1].isalpha():
        return NameCheck.MALFORMED
    return NameCheck.OK


def check_array_range(value: str, max_size: int) -> RangeCheck:
    """Array index range ``X-Y[:Z]``: X < Y < max_size and step Z >= 1."""
    match = _RANGE.fullmatch(value)
    if match is None:
        return RangeCheck.MALFORMED
    start, end = int(match.group(1)), int(match.group(2))
    step = int(match.group(3)) if match.group(3) is not None else 1
    if start >= end or step < 1 or end >= max_size:
        return RangeCheck.OUT_OF_RANGE
    return RangeCheck.OK


def is_resource_name(value: str) -> bool:
    return _RESOURCE_NAME.fullmatch(value) is not None
