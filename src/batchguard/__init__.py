"""
batchguard - attribute verification for batch workload requests.

Decides whether an attribute value attached to a job, queue, reservation or
server request is acceptable before the request is admitted, and if not, why.

Quick start::

    from batchguard import AttributeValue, ObjectKind, RequestKind, verify

    attr = AttributeValue("Hold_Types", value="uo")
    result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr)
    result.accepted  # True
"""

__version__ = "0.1.0"

from batchguard.core.enums import Command, ObjectKind, Operator, RequestKind
from batchguard.core.errors import ErrorCode, VerificationError
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.context import VerificationContext
from batchguard.verification.registry import (
    Outcome,
    VerificationResult,
    VerifierKind,
    verify,
    verify_legacy,
)

__all__ = [
    "AttributeValue",
    "Command",
    "ErrorCode",
    "ObjectKind",
    "Operator",
    "Outcome",
    "RequestKind",
    "VerificationContext",
    "VerificationError",
    "VerificationResult",
    "VerifierKind",
    "verify",
    "verify_legacy",
]
