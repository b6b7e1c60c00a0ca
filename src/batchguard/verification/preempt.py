"""
Preemption-target verifier.

A preemption-target spec is either the literal ``NONE`` or a comma-separated
list of entries in two namespaces, in any order and repeated freely::

    Resource_List.<resource>=<value>
    queue=<value>

Manifesto:
    - **Two namespaces, two tables:** ``Resource_List`` entries are checked
      against the general resource table, ``queue`` entries against the
      reservation attribute table
    - **Unknown is opaque:** An unrecognized name still counts as a target;
      the server validates custom resources later
    - **Non-destructive scan:** Entries are sliced out of immutable strings,
      never cut in place

Architecture:
    ::

        value ──► NONE? ──yes──► exact match ? Ok : BADATVAL
                   │ no
                   ▼
        for namespace in (RESOURCE_LIST, QUEUE):
            haystack = value            (RESOURCE_LIST, case-sensitive)
                     | value.lower()    (QUEUE)
            for each keyword occurrence:
                found = True
                slice name/value ──► malformed ? BADATVAL
                lookup name ──► unknown ? skip past keyword
                datatype + value check ──► Err ? return it
                resume after entry
        found ? Ok : BADATVAL

Examples:
    >>> ctx = VerificationContext(RequestKind.MANAGER)
    >>> verify_preempt_targets(ctx, AttributeValue("preempt_targets", "queue=batch"))
    Ok('queue=batch')
    >>> verify_preempt_targets(ctx, AttributeValue("preempt_targets", "none extra")).is_err()
    True

Guardrails:
    ❌ DON'T: Accept ``Resource_List`` followed by anything but ``.``
    ✅ DO: Reject the whole value, even if a longer name merely starts with it

Tags:
    verification, preemption, grammar, batchguard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from batchguard.core.errors import BadValueError, VerificationError
from batchguard.core.result import Err, Ok, Result
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.reporter import describe
from batchguard.verification.resource import check_definition

if TYPE_CHECKING:
    from batchguard.definitions.table import DefinitionTable
    from batchguard.verification.context import VerificationContext


TARGET_NONE = "NONE"


class TargetNamespace(Enum):
    """Namespace of a preemption-target entry; the value is its keyword."""

    RESOURCE_LIST = "Resource_List"
    QUEUE = "queue"

    @property
    def keyword(self) -> str:
        return self.value

    def haystack(self, value: str) -> str:
        """Text scanned for this namespace's keyword."""
        if self is TargetNamespace.QUEUE:
            return value.lower()
        return value

    def table(self, ctx: VerificationContext) -> DefinitionTable:
        if self is TargetNamespace.QUEUE:
            return ctx.reservation_attributes
        return ctx.resources


# fixed order: resources first, then queues
SCAN_ORDER = (TargetNamespace.RESOURCE_LIST, TargetNamespace.QUEUE)


@dataclass(frozen=True)
class TargetEntry:
    """One ``name=value`` entry and the offset just past it."""

    namespace: TargetNamespace
    name: str
    value: str
    end: int


def parse_entry(text: str, namespace: TargetNamespace, at: int) -> TargetEntry | None:
    """Slice the entry whose keyword occurs at ``at``; None when malformed.

    ``Resource_List`` must be followed by ``.`` and the name is what follows
    it; for ``queue`` the keyword itself starts the name. Either way an ``=``
    must come before the next comma.
    """
    start = at
    if namespace is TargetNamespace.RESOURCE_LIST:
        start = at + len(namespace.keyword)
        if text[start:start + 1] != ".":
            return None
        start += 1

    end = text.find(",", start)
    if end == -1:
        end = len(text)
    equals = text.find("=", start, end)
    if equals == -1:
        return None
    return TargetEntry(namespace, text[start:equals], text[equals + 1:end], end)


def verify_preempt_targets(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return Err(BadValueError())

    stripped = attr.value.lstrip()
    if stripped[:len(TARGET_NONE)].upper() == TARGET_NONE:
        if stripped.upper() != TARGET_NONE:
            return Err(BadValueError())
        return Ok(attr.value)

    found = False
    for namespace in SCAN_ORDER:
        text = namespace.haystack(attr.value)
        table = namespace.table(ctx)
        keyword = namespace.keyword
        position = text.find(keyword)
        while position != -1:
            found = True
            entry = parse_entry(text, namespace, position)
            if entry is None:
                return Err(BadValueError())

            definition = table.find(entry.name)
            if definition is None:
                position = text.find(keyword, position + len(keyword))
                continue

            scratch = AttributeValue(entry.name, entry.value)
            match check_definition(ctx, definition, scratch):
                case Err(VerificationError() as error):
                    return Err(describe(error))
                case Err() as failure:
                    return failure

            position = text.find(keyword, entry.end)

    if not found:
        return Err(BadValueError())
    return Ok(attr.value)
