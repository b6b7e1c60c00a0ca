"""
Structured error types for attribute verification.

Provides a typed hierarchy of verification failures carrying the batch server
error code, a category used for routing and reporting, and optional context
naming the attribute and resource that failed.

Every verifier reports failure by returning ``Err(VerificationError)`` rather
than raising. The error carries:
- **Code:** The server error code (``ErrorCode``) handed back to the client
- **Category:** What kind of failure (bad value, bad host, range, system)
- **Message:** Optional descriptive text; absent means "render the code text"
- **Fatal:** Whether the failure is a local system failure rather than a
  rejection of user input
- **Context:** Request, attribute and resource names for logging

Manifesto:
    - **Rejection is not failure:** A bad value and an exhausted allocator
      must never be confused by the caller
    - **Codes are the contract:** The integer code is what crosses the wire
    - **Messages are optional:** Absent messages fall back to the code text

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                     VerificationError                           │
        │            (code, category, message, fatal, context)            │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  BadValueError     BadHostError      RangeSpecificError         │
        │  (VALIDATION)      (HOST)            (RANGE)                    │
        │                                            │                     │
        │                                      ValueOutOfRangeError       │
        │                                      JobNameTooLongError        │
        │                                      LicenseMinError            │
        │                                      LicenseMaxError            │
        │                                      LicenseLingerError         │
        │                                                                  │
        │  SystemFailureError                 InternalError               │
        │  (SYSTEM, fatal)                    (INTERNAL)                  │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> err = BadValueError()
    >>> err.code
    <ErrorCode.BADATVAL: 15014>
    >>> err.message is None
    True
    >>> str(err)
    'Illegal attribute or resource value'

    >>> SystemFailureError().fatal
    True

Guardrails:
    ❌ DON'T: Raise VerificationError out of a verifier
    ✅ DO: Return Err(error) and let the registry classify it

    ❌ DON'T: Report MemoryError as BadValueError
    ✅ DO: Use SystemFailureError so the caller sees a fatal result

Tags:
    error-handling, exception-hierarchy, error-codes, batchguard

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Batch server error codes produced by the verification engine."""

    NONE = 0
    BADHOST = 15008
    SYSTEM = 15010
    INTERNAL = 15011
    BADATVAL = 15014
    ATVALERANGE = 15052
    JOBNBIG = 15055
    LICENSE_MIN_BADVAL = 15183
    LICENSE_MAX_BADVAL = 15184
    LICENSE_LINGER_BADVAL = 15185


_ERROR_TEXT: dict[ErrorCode, str] = {
    ErrorCode.NONE: "No error",
    ErrorCode.BADHOST: "Access from host not allowed, or unknown host",
    ErrorCode.SYSTEM: "System error occurred",
    ErrorCode.INTERNAL: "Internal server error occurred",
    ErrorCode.BADATVAL: "Illegal attribute or resource value",
    ErrorCode.ATVALERANGE: "Attribute value out of range",
    ErrorCode.JOBNBIG: "Job name is too long",
    ErrorCode.LICENSE_MIN_BADVAL: "pbs_license_min is < 0, or > pbs_license_max",
    ErrorCode.LICENSE_MAX_BADVAL: "pbs_license_max is < 0, or < pbs_license_min",
    ErrorCode.LICENSE_LINGER_BADVAL: "pbs_license_linger_time is <= 0",
}


def error_text(code: int) -> str | None:
    """Return the descriptive text for an error code, or None if unknown."""
    try:
        return _ERROR_TEXT[ErrorCode(code)]
    except ValueError:
        return None


class ErrorCategory(str, Enum):
    """
    Failure categories for routing and reporting.

    Attributes:
        VALIDATION: Value missing, empty, malformed or outside the grammar
        HOST: ACL host failed resolution or did not match
        RANGE: Attribute-specific range violations with their own code
        SYSTEM: Local resource exhaustion; always fatal
        INTERNAL: Engine misuse (e.g. no attribute supplied)
    """

    VALIDATION = "VALIDATION"
    HOST = "HOST"
    RANGE = "RANGE"
    SYSTEM = "SYSTEM"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a verification error.

    Only set fields are serialized by ``to_dict()``; anything that has no
    dedicated field goes to ``metadata``.

    Examples:
        >>> ctx = ErrorContext(attribute="Resource_List", resource="ncpus")
        >>> ctx.to_dict()
        {'attribute': 'Resource_List', 'resource': 'ncpus'}
    """

    request: str | None = None
    object_kind: str | None = None
    attribute: str | None = None
    resource: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["request", "object_kind", "attribute", "resource"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class VerificationError(Exception):
    """
    Base exception for all verification failures.

    Subclasses set ``default_code`` and ``default_category``; ``fatal`` marks
    failures that are local system problems rather than rejected input.

    ``message`` is None unless a verifier or the reporter attached descriptive
    text. ``str(error)`` always renders something: the message when present,
    else the code text.
    """

    default_code: ErrorCode = ErrorCode.BADATVAL
    default_category: ErrorCategory = ErrorCategory.VALIDATION
    fatal: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        self.code = code if code is not None else self.default_code
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        super().__init__(self.render())

        if cause is not None:
            self.__cause__ = cause

    def render(self) -> str:
        """Message if set, else the code's text, else the bare code."""
        if self.message is not None:
            return self.message
        return error_text(self.code) or f"error {int(self.code)}"

    def __str__(self) -> str:
        return self.render()

    def with_message(self, message: str) -> VerificationError:
        """Return a copy of this error carrying ``message``."""
        return type(self)(
            message,
            code=self.code,
            category=self.category,
            context=self.context,
            cause=self.cause,
        )

    def with_context(self, **kwargs: Any) -> VerificationError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(BadValueError().with_context(attribute="Hold_Types"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "code": int(self.code),
            "message": self.render(),
            "category": self.category.value,
            "fatal": self.fatal,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={int(self.code)}, message={self.message!r})"


# =============================================================================
# REJECTIONS
# =============================================================================


class BadValueError(VerificationError):
    """Value missing, empty, malformed, or outside the attribute's grammar."""

    default_code = ErrorCode.BADATVAL
    default_category = ErrorCategory.VALIDATION


class BadHostError(VerificationError):
    """ACL host part failed resolution or did not match its canonical name."""

    default_code = ErrorCode.BADHOST
    default_category = ErrorCategory.HOST


class RangeSpecificError(VerificationError):
    """Range violation reported with an attribute-specific code."""

    default_code = ErrorCode.ATVALERANGE
    default_category = ErrorCategory.RANGE


class ValueOutOfRangeError(RangeSpecificError):
    default_code = ErrorCode.ATVALERANGE


class JobNameTooLongError(RangeSpecificError):
    default_code = ErrorCode.JOBNBIG


class LicenseMinError(RangeSpecificError):
    default_code = ErrorCode.LICENSE_MIN_BADVAL


class LicenseMaxError(RangeSpecificError):
    default_code = ErrorCode.LICENSE_MAX_BADVAL


class LicenseLingerError(RangeSpecificError):
    default_code = ErrorCode.LICENSE_LINGER_BADVAL


# =============================================================================
# FATAL / INTERNAL
# =============================================================================


class SystemFailureError(VerificationError):
    """
    Local resource exhaustion (allocation failure) at any stage.

    Always fatal: the caller must not report it as a user input error.
    """

    default_code = ErrorCode.SYSTEM
    default_category = ErrorCategory.SYSTEM
    fatal = True


class InternalError(VerificationError):
    """The engine was called without an attribute to verify."""

    default_code = ErrorCode.INTERNAL
    default_category = ErrorCategory.INTERNAL


def is_fatal(error: Exception) -> bool:
    """True if the error is a local system failure rather than a rejection."""
    if isinstance(error, VerificationError):
        return error.fatal
    return isinstance(error, MemoryError)
