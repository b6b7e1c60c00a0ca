"""
Request, object, command and operator enums shared by every verifier.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class RequestKind(str, Enum):
    """
    The batch request an attribute arrives with.

    Several verifiers relax or tighten their grammar by request: select-type
    queries accept out-of-range priorities, status requests accept an empty
    job name, submissions accept numeric-leading names.
    """

    QUEUE_JOB = "queue-job"
    MODIFY_JOB = "modify-job"
    SELECT_JOBS = "select-jobs"
    STATUS_JOB = "status-job"
    SUBMIT_RESV = "submit-resv"
    MODIFY_RESV = "modify-resv"
    MANAGER = "manager"


class ObjectKind(str, Enum):
    """Entity type the attribute belongs to."""

    JOB = "job"
    QUEUE = "queue"
    RESERVATION = "reservation"
    SERVER = "server"
    NODE = "node"
    SCHEDULER = "scheduler"


class Command(str, Enum):
    """Manager command (qmgr-style) carried with the request, if any."""

    NONE = "none"
    CREATE = "create"
    DELETE = "delete"
    SET = "set"
    UNSET = "unset"
    LIST = "list"
    PRINT = "print"


class Operator(str, Enum):
    """
    Comparison / assignment operator attached to an attribute value.

    Only select-type requests compare; the others assign with SET.
    """

    SET = "set"
    UNSET = "unset"
    INCR = "incr"
    DECR = "decr"
    EQ = "eq"
    NE = "ne"
    GE = "ge"
    GT = "gt"
    LE = "le"
    LT = "lt"
    DFLT = "dflt"
