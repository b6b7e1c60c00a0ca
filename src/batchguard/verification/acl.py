"""
Manager/operator ACL verifier.

Each entry is ``user@host``. A host that is not a wildcard must already be
written in its fully qualified form: it is resolved and compared,
case-insensitively, with the canonical name. A host beginning with ``*``
cannot be resolved and is accepted as written.

This is the one verifier that may block, on the name-service lookup.
Bounding that call is the caller's responsibility.
"""

from __future__ import annotations

import socket
from typing import TYPE_CHECKING

from batchguard.core.errors import BadHostError, BadValueError
from batchguard.core.logging import get_logger
from batchguard.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from batchguard.verification.attributes import AttributeValue
    from batchguard.verification.context import VerificationContext

logger = get_logger(__name__)


def resolve_fqdn(host: str) -> str:
    """Canonical name of ``host``; raises OSError when it does not resolve.

    Names the IDNA codec refuses (empty or over-long labels) and names with
    embedded NULs are resolution failures too.
    """
    try:
        addresses = socket.getaddrinfo(host, None, flags=socket.AI_CANONNAME)
    except (UnicodeError, ValueError) as exc:
        raise OSError(f"cannot resolve {host!r}: {exc}") from exc
    for *_, canonical, _ in addresses:
        if canonical:
            return canonical
    raise OSError(f"no canonical name for {host}")


def verify_acl(ctx: VerificationContext, attr: AttributeValue) -> Result[str | None]:
    if attr.is_blank():
        return Err(BadValueError())
    if not ctx.acl_host_check:
        return Ok(attr.value)

    for raw in attr.value.split(","):
        entry = raw.strip(" ")
        _, at, host = entry.partition("@")
        if not at:
            return Err(BadHostError())
        if host.startswith("*"):
            continue
        try:
            canonical = ctx.resolve_host(host)
        except OSError as exc:
            logger.warning("acl_host_unresolved", host=host, error=str(exc))
            return Err(BadHostError(cause=exc))
        if canonical.lower() != host.lower():
            logger.info("acl_host_not_canonical", host=host, canonical=canonical)
            return Err(BadHostError())
    return Ok(attr.value)
