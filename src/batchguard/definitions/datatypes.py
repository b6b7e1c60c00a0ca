"""
Datatype and generic value checkers for definition-table entries.

Datatype checkers take only the attribute and decide whether the value is a
well-formed instance of the resource's type. Value checkers additionally get
the :class:`~batchguard.verification.context.VerificationContext` and judge
the meaning of an already well-typed value.

Grammars:
    long      optional sign, decimal digits
    float     Python float literal without inf/nan
    size      non-negative integer with optional k/m/g/t/p multiplier and b/w unit
    boolean   true/false/t/f/y/n/1/0, case-insensitive
    duration  [[HH:]MM:]SS[.fraction] with each field non-negative
    string    non-empty, printable
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from batchguard.core.errors import BadValueError
from batchguard.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from batchguard.verification.attributes import AttributeValue
    from batchguard.verification.context import VerificationContext


_LONG = re.compile(r"[+-]?\d+", re.ASCII)
_SIZE = re.compile(r"(\d+)([kmgtp]?)([bw]?)", re.IGNORECASE | re.ASCII)
_DURATION = re.compile(r"(?:(?:(\d+):)?(\d+):)?(\d+)(?:\.(\d+))?", re.ASCII)
_BOOLEAN_WORDS = frozenset({"true", "false", "t", "f", "y", "n", "1", "0"})


def _bad() -> Result[str | None]:
    return Err(BadValueError())


def verify_long(attr: AttributeValue) -> Result[str | None]:
    if attr.value is None or not _LONG.fullmatch(attr.value):
        return _bad()
    return Ok(attr.value)


def verify_float(attr: AttributeValue) -> Result[str | None]:
    if not attr.value or not attr.value.isascii():
        return _bad()
    try:
        number = float(attr.value)
    except ValueError:
        return _bad()
    if not math.isfinite(number):
        return _bad()
    return Ok(attr.value)


def verify_size(attr: AttributeValue) -> Result[str | None]:
    if attr.value is None or not _SIZE.fullmatch(attr.value):
        return _bad()
    return Ok(attr.value)


def verify_boolean(attr: AttributeValue) -> Result[str | None]:
    if attr.value is None or attr.value.lower() not in _BOOLEAN_WORDS:
        return _bad()
    return Ok(attr.value)


def verify_duration(attr: AttributeValue) -> Result[str | None]:
    if attr.value is None:
        return _bad()
    match = _DURATION.fullmatch(attr.value)
    if match is None:
        return _bad()
    hours, minutes, seconds, _ = match.groups()
    # minutes and seconds are bounded only when a larger field precedes them
    if hours is not None and int(minutes) >= 60:
        return _bad()
    if minutes is not None and int(seconds) >= 60:
        return _bad()
    return Ok(attr.value)


def verify_string(attr: AttributeValue) -> Result[str | None]:
    if not attr.value or not attr.value.isprintable():
        return _bad()
    return Ok(attr.value)


def verify_non_negative(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Value check for long resources that count things."""
    if attr.value is None or attr.value.lstrip().startswith("-"):
        return _bad()
    return Ok(attr.value)


_QUEUE_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]{0,14}")


def verify_queue_name(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Queue names: a letter, then up to 14 letters, digits, ``_`` or ``-``."""
    if attr.value is None or not _QUEUE_NAME.fullmatch(attr.value):
        return _bad()
    return Ok(attr.value)
