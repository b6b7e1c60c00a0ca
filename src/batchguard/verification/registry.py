"""
Verifier registry: attribute identity → verifier, and the ``verify`` entry point.

The registry is a fixed mapping from ``(object kind, attribute name)`` to a
:class:`VerifierKind`. Dispatch from a kind to its function is a single
``match`` statement, so adding a kind without a verifier fails type checking
at ``assert_never`` instead of surfacing at run time.

Manifesto:
    - **Closed set of verifiers:** One enum member per verifier, no runtime
      registration
    - **Atomic rewrite:** The attribute's value is replaced only after the
      verifier accepted it
    - **Unknown is upstream's business:** Attributes the registry does not
      know are accepted here and left to the server's default policy

Architecture:
    ::

        verify(request, object_kind, command, attribute)
            │
            ├── attribute is None ──────────────► INTERNAL (rejected)
            ├── verifier_for(object_kind, name)
            │       └── None ───────────────────► ACCEPTED (no-op)
            ├── run_verifier(kind, ctx, attribute)
            │       ├── Ok(value) ─► attribute.value = value ─► ACCEPTED
            │       ├── Err(error), error.fatal ─────────────► FATAL
            │       └── Err(error) ──────────────────────────► REJECTED
            └── MemoryError anywhere ───────────────────────► FATAL

Examples:
    >>> attr = AttributeValue("Hold_Types", "pn")
    >>> result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr)
    >>> result.outcome, result.code
    (<Outcome.REJECTED: 'rejected'>, <ErrorCode.BADATVAL: 15014>)
    >>> result.as_legacy()
    (15014, None)

Tags:
    verification, registry, dispatch, batchguard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, assert_never

from batchguard.core.enums import Command, ObjectKind, RequestKind
from batchguard.core.errors import (
    ErrorCode,
    InternalError,
    SystemFailureError,
    VerificationError,
    is_fatal,
)
from batchguard.core.logging import get_logger
from batchguard.core.result import Err, Ok, Result
from batchguard.verification import scalar
from batchguard.verification.acl import verify_acl
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.context import VerificationContext
from batchguard.verification.resource import verify_resource
from batchguard.verification.select import verify_select

logger = get_logger(__name__)


class VerifierKind(str, Enum):
    """Every verifier the registry can dispatch to."""

    RESOURCE = "resource"
    SELECT = "select"
    USER_LIST = "user_list"
    AUTHORIZED_USERS = "authorized_users"
    MAIL_USERS = "mail_users"
    SHELL_PATH_LIST = "shell_path_list"
    DEPEND_LIST = "depend_list"
    PATH = "path"
    STAGE_LIST = "stage_list"
    ARRAY_RANGE = "array_range"
    JOB_NAME = "job_name"
    CHECKPOINT = "checkpoint"
    HOLD = "hold"
    JOIN_PATH = "join_path"
    KEEP_FILES = "keep_files"
    MAIL_POINTS = "mail_points"
    JOB_STATE = "job_state"
    SANDBOX = "sandbox"
    CREDENTIAL_NAME = "credential_name"
    QUEUE_TYPE = "queue_type"
    PRIORITY = "priority"
    ZERO_OR_POSITIVE = "zero_or_positive"
    NON_ZERO_POSITIVE = "non_zero_positive"
    LICENSE_MIN = "license_min"
    LICENSE_MAX = "license_max"
    LICENSE_LINGER = "license_linger"
    ACL = "acl"


# attributes whose values are resource=value pairs
RESOURCE_LIST_ATTRIBUTES = frozenset(
    {"Resource_List", "resources_max", "resources_min", "resources_default", "resources_available"}
)


def _resource_lists(obj: ObjectKind, *names: str) -> dict[tuple[ObjectKind, str], VerifierKind]:
    return {(obj, name): VerifierKind.RESOURCE for name in names}


_JOB = ObjectKind.JOB
_RESV = ObjectKind.RESERVATION
_QUEUE = ObjectKind.QUEUE
_SERVER = ObjectKind.SERVER

ATTRIBUTES: Mapping[tuple[ObjectKind, str], VerifierKind] = MappingProxyType(
    {
        # ── Jobs ─────────────────────────────────────────────────────
        (_JOB, "Job_Name"): VerifierKind.JOB_NAME,
        (_JOB, "Checkpoint"): VerifierKind.CHECKPOINT,
        (_JOB, "Hold_Types"): VerifierKind.HOLD,
        (_JOB, "Join_Path"): VerifierKind.JOIN_PATH,
        (_JOB, "Keep_Files"): VerifierKind.KEEP_FILES,
        (_JOB, "Mail_Points"): VerifierKind.MAIL_POINTS,
        (_JOB, "Mail_Users"): VerifierKind.MAIL_USERS,
        (_JOB, "Priority"): VerifierKind.PRIORITY,
        (_JOB, "Shell_Path_List"): VerifierKind.SHELL_PATH_LIST,
        (_JOB, "User_List"): VerifierKind.USER_LIST,
        (_JOB, "group_list"): VerifierKind.USER_LIST,
        (_JOB, "depend"): VerifierKind.DEPEND_LIST,
        (_JOB, "Output_Path"): VerifierKind.PATH,
        (_JOB, "Error_Path"): VerifierKind.PATH,
        (_JOB, "stagein"): VerifierKind.STAGE_LIST,
        (_JOB, "stageout"): VerifierKind.STAGE_LIST,
        (_JOB, "sandbox"): VerifierKind.SANDBOX,
        (_JOB, "array_indices_submitted"): VerifierKind.ARRAY_RANGE,
        (_JOB, "job_state"): VerifierKind.JOB_STATE,
        (_JOB, "cred"): VerifierKind.CREDENTIAL_NAME,
        (_JOB, "run_count"): VerifierKind.ZERO_OR_POSITIVE,
        (_JOB, "schedselect"): VerifierKind.SELECT,
        **_resource_lists(_JOB, "Resource_List"),
        # ── Reservations ─────────────────────────────────────────────
        (_RESV, "Reserve_Name"): VerifierKind.JOB_NAME,
        (_RESV, "Authorized_Users"): VerifierKind.AUTHORIZED_USERS,
        (_RESV, "Authorized_Groups"): VerifierKind.AUTHORIZED_USERS,
        (_RESV, "Authorized_Hosts"): VerifierKind.AUTHORIZED_USERS,
        (_RESV, "Mail_Points"): VerifierKind.MAIL_POINTS,
        (_RESV, "Mail_Users"): VerifierKind.MAIL_USERS,
        (_RESV, "User_List"): VerifierKind.USER_LIST,
        (_RESV, "group_list"): VerifierKind.USER_LIST,
        **_resource_lists(_RESV, "Resource_List"),
        # ── Queues ───────────────────────────────────────────────────
        (_QUEUE, "queue_type"): VerifierKind.QUEUE_TYPE,
        (_QUEUE, "Priority"): VerifierKind.PRIORITY,
        (_QUEUE, "route_retry_time"): VerifierKind.ZERO_OR_POSITIVE,
        (_QUEUE, "route_lifetime"): VerifierKind.ZERO_OR_POSITIVE,
        **_resource_lists(_QUEUE, "resources_max", "resources_min", "resources_default", "resources_available"),
        # ── Server ───────────────────────────────────────────────────
        (_SERVER, "managers"): VerifierKind.ACL,
        (_SERVER, "operators"): VerifierKind.ACL,
        (_SERVER, "pbs_license_min"): VerifierKind.LICENSE_MIN,
        (_SERVER, "pbs_license_max"): VerifierKind.LICENSE_MAX,
        (_SERVER, "pbs_license_linger_time"): VerifierKind.LICENSE_LINGER,
        (_SERVER, "scheduler_iteration"): VerifierKind.NON_ZERO_POSITIVE,
        (_SERVER, "max_array_size"): VerifierKind.NON_ZERO_POSITIVE,
        (_SERVER, "max_concurrent_provision"): VerifierKind.NON_ZERO_POSITIVE,
        (_SERVER, "node_fail_requeue"): VerifierKind.ZERO_OR_POSITIVE,
        **_resource_lists(_SERVER, "resources_max", "resources_default", "resources_available"),
        # ── Nodes ────────────────────────────────────────────────────
        **_resource_lists(ObjectKind.NODE, "resources_available"),
    }
)


def verifier_for(object_kind: ObjectKind, name: str) -> VerifierKind | None:
    """Verifier kind registered for ``name`` on ``object_kind``, if any."""
    return ATTRIBUTES.get((object_kind, name))


def run_verifier(kind: VerifierKind, ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    """Dispatch ``attr`` to the verifier for ``kind``."""
    match kind:
        case VerifierKind.RESOURCE:
            return verify_resource(ctx, attr)
        case VerifierKind.SELECT:
            return verify_select(ctx, attr)
        case VerifierKind.USER_LIST:
            return scalar.verify_user_list(ctx, attr)
        case VerifierKind.AUTHORIZED_USERS:
            return scalar.verify_authorized_users(ctx, attr)
        case VerifierKind.MAIL_USERS:
            return scalar.verify_mail_users(ctx, attr)
        case VerifierKind.SHELL_PATH_LIST:
            return scalar.verify_shell_path_list(ctx, attr)
        case VerifierKind.DEPEND_LIST:
            return scalar.verify_depend_list(ctx, attr)
        case VerifierKind.PATH:
            return scalar.verify_path(ctx, attr)
        case VerifierKind.STAGE_LIST:
            return scalar.verify_stage_list(ctx, attr)
        case VerifierKind.ARRAY_RANGE:
            return scalar.verify_array_range(ctx, attr)
        case VerifierKind.JOB_NAME:
            return scalar.verify_job_name(ctx, attr)
        case VerifierKind.CHECKPOINT:
            return scalar.verify_checkpoint(ctx, attr)
        case VerifierKind.HOLD:
            return scalar.verify_hold(ctx, attr)
        case VerifierKind.JOIN_PATH:
            return scalar.verify_join_path(ctx, attr)
        case VerifierKind.KEEP_FILES:
            return scalar.verify_keep_files(ctx, attr)
        case VerifierKind.MAIL_POINTS:
            return scalar.verify_mail_points(ctx, attr)
        case VerifierKind.JOB_STATE:
            return scalar.verify_job_state(ctx, attr)
        case VerifierKind.SANDBOX:
            return scalar.verify_sandbox(ctx, attr)
        case VerifierKind.CREDENTIAL_NAME:
            return scalar.verify_credential_name(ctx, attr)
        case VerifierKind.QUEUE_TYPE:
            return scalar.verify_queue_type(ctx, attr)
        case VerifierKind.PRIORITY:
            return scalar.verify_priority(ctx, attr)
        case VerifierKind.ZERO_OR_POSITIVE:
            return scalar.verify_zero_or_positive(ctx, attr)
        case VerifierKind.NON_ZERO_POSITIVE:
            return scalar.verify_non_zero_positive(ctx, attr)
        case VerifierKind.LICENSE_MIN:
            return scalar.verify_license_min(ctx, attr)
        case VerifierKind.LICENSE_MAX:
            return scalar.verify_license_max(ctx, attr)
        case VerifierKind.LICENSE_LINGER:
            return scalar.verify_license_linger(ctx, attr)
        case VerifierKind.ACL:
            return verify_acl(ctx, attr)
        case _:
            assert_never(kind)


# =============================================================================
# RESULTS
# =============================================================================


class Outcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FATAL = "fatal"


@dataclass(frozen=True)
class VerificationResult:
    """
    What the caller gets back from :func:`verify`.

    ``message`` is None on a rejection when no verifier attached text; the
    caller then renders the code generically. ``value`` is the accepted
    (possibly rewritten) value.
    """

    outcome: Outcome
    code: ErrorCode = ErrorCode.NONE
    message: str | None = None
    value: str | None = None
    error: VerificationError | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED

    @property
    def rejected(self) -> bool:
        return self.outcome is Outcome.REJECTED

    @property
    def fatal(self) -> bool:
        return self.outcome is Outcome.FATAL

    @classmethod
    def from_error(cls, error: Exception) -> VerificationResult:
        if not isinstance(error, VerificationError):
            error = SystemFailureError(cause=error) if is_fatal(error) else InternalError(str(error))
        outcome = Outcome.FATAL if error.fatal else Outcome.REJECTED
        return cls(outcome, error.code, error.message, error=error)

    def as_legacy(self) -> tuple[int, str | None]:
        """``(0, None)`` accepted, ``(code, message)`` rejected, ``(-1, message)`` fatal."""
        if self.accepted:
            return 0, None
        if self.fatal:
            return -1, self.message
        return int(self.code), self.message

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"outcome": self.outcome.value, "code": int(self.code)}
        if self.message is not None:
            result["message"] = self.message
        if self.value is not None:
            result["value"] = self.value
        return result


def verify(
    request: RequestKind,
    object_kind: ObjectKind,
    command: Command | None,
    attribute: AttributeValue | None,
    *,
    context: VerificationContext | None = None,
) -> VerificationResult:
    """Verify one attribute of a batch request.

    Args:
        request: Batch request kind.
        object_kind: Entity the attribute belongs to.
        command: Manager command, or None.
        attribute: The attribute; its ``value`` is replaced on acceptance when
            the verifier rewrote it.
        context: Configured context to reuse; its request identity is
            overridden by the arguments. Built from settings when omitted.
    """
    if attribute is None:
        return VerificationResult.from_error(InternalError())

    command = command or Command.NONE
    if context is None:
        ctx = VerificationContext.from_settings(request, object_kind, command)
    else:
        ctx = context.for_request(request, object_kind, command)

    kind = verifier_for(object_kind, attribute.name)
    if kind is None:
        logger.debug("attribute_unregistered", attribute=attribute.name, object_kind=object_kind.value)
        return VerificationResult(Outcome.ACCEPTED, value=attribute.value)

    log = logger.bind(
        attribute=attribute.qualified_name,
        verifier=kind.value,
        request=request.value,
    )
    try:
        result = run_verifier(kind, ctx, attribute)
    except MemoryError as exc:
        result = Err(SystemFailureError(cause=exc))

    match result:
        case Ok(value):
            if value != attribute.value:
                log.debug("attribute_rewritten", original=attribute.value, value=value)
                attribute.value = value
            log.debug("attribute_accepted")
            return VerificationResult(Outcome.ACCEPTED, value=value)
        case Err(error):
            verdict = VerificationResult.from_error(error)
            verdict.error.with_context(
                request=request.value,
                object_kind=object_kind.value,
                attribute=attribute.name,
                resource=attribute.resource,
            )
            if verdict.fatal:
                log.error("attribute_fatal", **verdict.error.to_dict())
            else:
                log.info("attribute_rejected", **verdict.error.to_dict())
            return verdict
    assert_never(result)


def verify_legacy(
    request: RequestKind,
    object_kind: ObjectKind,
    command: Command | None,
    attribute: AttributeValue | None,
    *,
    context: VerificationContext | None = None,
) -> tuple[int, str | None]:
    """Integer contract: 0 accepted, >0 rejection code, <0 fatal."""
    return verify(request, object_kind, command, attribute, context=context).as_legacy()
