"""
Error reporter: attach descriptive text to a verification error.

Builds the message a client sees when a value is rejected: the code's text,
optionally qualified with ``attribute.resource``. A message already set by a
verifier is never replaced.

Building a message can fail only by running out of memory. That failure is
reported as :class:`~batchguard.core.errors.SystemFailureError`, so the caller
gets a fatal result instead of the rejection that triggered the report.
"""

from __future__ import annotations

from batchguard.core.errors import SystemFailureError, VerificationError, error_text
from batchguard.core.logging import get_logger

logger = get_logger(__name__)


def _with_text(error: VerificationError, suffix: str | None) -> VerificationError:
    if error.message is not None or error.fatal:
        return error
    try:
        text = error_text(error.code)
        if text is None:
            return error
        message = text if suffix is None else f"{text} {suffix}"
    except MemoryError as exc:
        logger.error("error_message_allocation_failed", code=int(error.code))
        return SystemFailureError(cause=exc)
    return error.with_message(message)


def describe(error: VerificationError) -> VerificationError:
    """Error carrying the plain code text as its message."""
    return _with_text(error, None)


def qualify(error: VerificationError, attribute: str, resource: str) -> VerificationError:
    """Error carrying ``"<code text> <attribute>.<resource>"`` as its message."""
    return _with_text(error, f"{attribute}.{resource}")
