"""
Resource verifier: check a value against its definition-table entry.

The datatype checker runs first; only when it accepts does the value checker
run, so value checkers may assume a well-typed input. Unknown resources are
accepted: custom resources are known only to the server, which validates them
later.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from batchguard.core.errors import VerificationError
from batchguard.core.result import Err, Ok, Result
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.reporter import qualify

if TYPE_CHECKING:
    from batchguard.definitions.table import DefinitionTable, ResourceDefinition
    from batchguard.verification.context import VerificationContext


def check_definition(
    ctx: VerificationContext,
    definition: ResourceDefinition,
    attr: AttributeValue,
) -> Result[str | None]:
    """Run ``definition``'s datatype check, then its value check."""
    result: Result[str | None] = Ok(attr.value)
    if definition.datatype_checker is not None:
        result = definition.datatype_checker(attr)
        if result.is_err():
            return result
    if definition.value_checker is not None:
        result = definition.value_checker(ctx, attr)
    return result


def verify_resource(
    ctx: VerificationContext,
    attr: AttributeValue,
    table: DefinitionTable | None = None,
) -> Result[str | None]:
    """Verify ``attr.value`` as resource ``attr.resource`` of attribute ``attr.name``.

    Args:
        ctx: Verification context.
        attr: Attribute whose ``resource`` names the entry to look up.
        table: Definition table; defaults to ``ctx.resources``.

    Returns:
        ``Ok(value)`` when accepted or unknown; ``Err`` with a message of the
        form ``"<code text> <attribute>.<resource>"`` when rejected.
    """
    if attr.resource is None:
        return Ok(attr.value)

    definition = (table if table is not None else ctx.resources).find(attr.resource)
    if definition is None:
        return Ok(attr.value)

    scratch = AttributeValue(attr.resource, attr.value, op=attr.op)
    match check_definition(ctx, definition, scratch):
        case Err(VerificationError() as error):
            return Err(qualify(error, attr.name, attr.resource))
        case result:
            return result
