"""
Scalar verifiers: fixed-grammar, enumerated and numeric attributes.

Each verifier has the signature ``(ctx, attr) -> Result[str | None]`` and
returns ``Ok(value)`` on acceptance. Two of them rewrite the value: the
dependency verifier returns the expanded list and the path verifier the
``host:/absolute`` form. ``mail_points`` returns the value without leading
whitespace.

Unless a verifier documents otherwise, a missing or empty value is rejected
with ``BADATVAL``.

Numeric attributes parse with C ``atol`` semantics: leading whitespace, an
optional sign and the longest run of digits; anything else reads as 0. So
``"12abc"`` is 12 and ``"abc"`` is 0.

Tags:
    verification, grammar, enumeration, batchguard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from batchguard.core.enums import Operator, RequestKind
from batchguard.core.errors import (
    BadValueError,
    JobNameTooLongError,
    LicenseLingerError,
    LicenseMaxError,
    LicenseMinError,
    ValueOutOfRangeError,
)
from batchguard.core.result import Err, Ok, Result
from batchguard.grammar import (
    GrammarError,
    NameCheck,
    RangeCheck,
    check_array_range,
    check_job_name,
    parse_at_list,
    parse_depend_list,
    parse_stage_list,
    prepare_path,
)

if TYPE_CHECKING:
    from batchguard.verification.attributes import AttributeValue
    from batchguard.verification.context import VerificationContext


PRIORITY_MIN = -1024
PRIORITY_MAX = 1023

CHECKPOINT_LETTERS = frozenset("nscwu")
HOLD_LETTERS = frozenset("uospn")
MAIL_POINT_LETTERS = frozenset("abe")
RESV_MAIL_POINT_LETTERS = frozenset("abec")
JOB_STATE_LETTERS = frozenset("EHQRTWSUBXFM")

JOIN_PATH_VALUES = ("oe", "eo", "n")
KEEP_FILES_VALUES = ("o", "e", "oe", "eo", "n")
SANDBOX_VALUES = ("home", "o_workdir", "private")
CREDENTIAL_NAMES = ("aes", "dce/krb5", "krb5", "grid_proxy")
QUEUE_TYPES = ("Execution", "Route")

# request kinds that may name a job with a leading digit
_NUMERIC_NAME_REQUESTS = frozenset(
    {
        RequestKind.QUEUE_JOB,
        RequestKind.MODIFY_JOB,
        RequestKind.SUBMIT_RESV,
        RequestKind.SELECT_JOBS,
    }
)
_EMPTY_NAME_REQUESTS = frozenset({RequestKind.STATUS_JOB, RequestKind.SELECT_JOBS})

_ATOL = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def atol(value: str) -> int:
    """C ``atol``: leading integer of ``value``, 0 when there is none."""
    match = _ATOL.match(value)
    return int(match.group(1)) if match else 0


def _bad() -> Result[str | None]:
    return Err(BadValueError())


# =============================================================================
# LISTS AND EXPANSIONS
# =============================================================================


def verify_user_list(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """``user[@host]`` list; hosts must be unique except in select queries."""
    if attr.is_blank():
        return _bad()
    try:
        parse_at_list(attr.value, unique_hosts=ctx.request != RequestKind.SELECT_JOBS, absolute_path=False)
    except GrammarError:
        return _bad()
    return Ok(attr.value)


def verify_authorized_users(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    try:
        parse_at_list(attr.value, unique_hosts=False, absolute_path=False)
    except GrammarError:
        return _bad()
    return Ok(attr.value)


def verify_mail_users(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    return verify_authorized_users(ctx, attr)


def verify_shell_path_list(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Absolute shell paths, at most one per host."""
    if attr.is_blank():
        return _bad()
    try:
        parse_at_list(attr.value, unique_hosts=True, absolute_path=True)
    except GrammarError:
        return _bad()
    return Ok(attr.value)


def verify_depend_list(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Dependency list; accepted values are replaced by their expansion."""
    if attr.is_blank():
        return _bad()
    try:
        return Ok(parse_depend_list(attr.value, ctx.server_name, ctx.depend_max_len))
    except GrammarError:
        return _bad()


def verify_path(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Output/error path; accepted values are replaced by ``host:/absolute/path``."""
    if attr.is_blank():
        return _bad()
    try:
        return Ok(prepare_path(attr.value, ctx.local_host, ctx.working_directory, ctx.path_max_len))
    except GrammarError:
        return _bad()


def verify_stage_list(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    try:
        parse_stage_list(attr.value)
    except GrammarError:
        return _bad()
    return Ok(attr.value)


# =============================================================================
# NAMES AND RANGES
# =============================================================================


def verify_array_range(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    match check_array_range(attr.value, ctx.max_array_size):
        case RangeCheck.MALFORMED:
            return _bad()
        case RangeCheck.OUT_OF_RANGE:
            return Err(ValueOutOfRangeError())
    return Ok(attr.value)


def verify_job_name(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Job or reservation name.

    Empty names are legal only in status and select requests. A leading digit
    is legal only when submitting, modifying or selecting.
    """
    if attr.value is None:
        return _bad()
    if attr.value == "":
        return Ok(attr.value) if ctx.request in _EMPTY_NAME_REQUESTS else _bad()

    allow_numeric = ctx.request in _NUMERIC_NAME_REQUESTS
    match check_job_name(attr.value, allow_numeric, ctx.job_name_max_len):
        case NameCheck.MALFORMED:
            return _bad()
        case NameCheck.TOO_LONG:
            return Err(JobNameTooLongError())
    return Ok(attr.value)


# =============================================================================
# FIXED ALPHABETS
# =============================================================================


def verify_checkpoint(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """One of ``n s c w u``, or ``c=<minutes>`` / ``w=<minutes>``.

    ``u`` (unset) may only be compared with EQ or NE in a select query.
    """
    value = attr.value
    if not value:
        return _bad()
    if len(value) == 1:
        if value not in CHECKPOINT_LETTERS:
            return _bad()
    elif value[0] not in "cw" or value[1] != "=" or not value[2:].isdigit() or not value[2:].isascii():
        return _bad()

    if ctx.request == RequestKind.SELECT_JOBS and value == "u":
        if attr.op not in (Operator.EQ, Operator.NE):
            return _bad()
    return Ok(value)


def verify_hold(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Hold letters ``u o s p n``.

    ``n`` excludes every other letter; ``p`` excludes ``u o s n``.
    """
    if attr.is_blank():
        return _bad()
    letters = set(attr.value)
    if not letters <= HOLD_LETTERS:
        return _bad()
    if "n" in letters and len(letters) > 1:
        return _bad()
    if "p" in letters and len(letters) > 1:
        return _bad()
    return Ok(attr.value)


def verify_mail_points(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    value = attr.value.lstrip()
    if not value:
        return _bad()
    if value != "n":
        allowed = RESV_MAIL_POINT_LETTERS if ctx.request == RequestKind.SUBMIT_RESV else MAIL_POINT_LETTERS
        if not set(value) <= allowed:
            return _bad()
    return Ok(value)


def verify_job_state(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Every character is a one-letter job state; empty only for status requests."""
    if attr.value is None:
        return _bad()
    if attr.value == "" and ctx.request != RequestKind.STATUS_JOB:
        return _bad()
    if not set(attr.value) <= JOB_STATE_LETTERS:
        return _bad()
    return Ok(attr.value)


# =============================================================================
# ENUMERATIONS
# =============================================================================


def verify_join_path(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or attr.value not in JOIN_PATH_VALUES:
        return _bad()
    return Ok(attr.value)


def verify_keep_files(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or attr.value not in KEEP_FILES_VALUES:
        return _bad()
    return Ok(attr.value)


def verify_sandbox(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or attr.value.lower() not in SANDBOX_VALUES:
        return _bad()
    return Ok(attr.value)


def verify_credential_name(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or attr.value not in CREDENTIAL_NAMES:
        return _bad()
    return Ok(attr.value)


def verify_queue_type(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Any case-insensitive prefix of ``Execution`` or ``Route`` (``e``, ``ROU``...)."""
    if attr.is_blank():
        return _bad()
    value = attr.value.lower()
    if any(name.lower().startswith(value) for name in QUEUE_TYPES):
        return Ok(attr.value)
    return _bad()


# =============================================================================
# NUMERIC
# =============================================================================


def verify_priority(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Priority in [-1024, 1023]; select queries may compare against anything."""
    if attr.is_blank():
        return _bad()
    priority = atol(attr.value)
    if not PRIORITY_MIN <= priority <= PRIORITY_MAX and ctx.request != RequestKind.SELECT_JOBS:
        return _bad()
    return Ok(attr.value)


def verify_zero_or_positive(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or atol(attr.value) < 0:
        return _bad()
    return Ok(attr.value)


def verify_non_zero_positive(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank() or atol(attr.value) <= 0:
        return _bad()
    return Ok(attr.value)


def verify_license_min(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    if not 0 <= atol(attr.value) <= ctx.max_licenses:
        return Err(LicenseMinError())
    return Ok(attr.value)


def verify_license_max(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    if not 0 <= atol(attr.value) <= ctx.max_licenses:
        return Err(LicenseMaxError())
    return Ok(attr.value)


def verify_license_linger(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return _bad()
    if atol(attr.value) <= 0:
        return Err(LicenseLingerError())
    return Ok(attr.value)
