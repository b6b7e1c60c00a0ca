"""
Select specification verifier.

Splits a select spec into its ``+``-joined chunks and every chunk into its
``resource=value`` pairs, then verifies each pair against the general
resource table. Chunks are visited left to right and pairs in written order;
the first rejection or fatal result is returned unchanged and earlier
successes are discarded.

Example::

    1:ncpus=2:mem=4gb+2:ncpus=1

checks ``ncpus=2``, ``mem=4gb``, then ``ncpus=1``. A failure is reported as
``"Illegal attribute or resource value select.ncpus"``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from batchguard.core.errors import BadValueError
from batchguard.core.result import Err, Ok, Result
from batchguard.grammar import GrammarError, parse_chunk, split_plus_spec
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.resource import verify_resource

if TYPE_CHECKING:
    from batchguard.verification.context import VerificationContext


def verify_select(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return Err(BadValueError())
    try:
        chunks = split_plus_spec(attr.value)
    except GrammarError:
        return Err(BadValueError())

    for text in chunks:
        try:
            chunk = parse_chunk(text)
        except GrammarError:
            return Err(BadValueError())
        for resource, value in chunk.pairs:
            pair = AttributeValue(attr.name, value, resource=resource, op=attr.op)
            result = verify_resource(ctx, pair, ctx.resources)
            if result.is_err():
                return result
    return Ok(attr.value)
