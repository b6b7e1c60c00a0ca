"""
Verification context: who is asking, and the read-only inputs verifiers use.

A context is built once per request from :class:`~batchguard.core.settings.VerifierSettings`
and passed to every verifier. It is frozen; nothing in it changes while
verifiers run, so one context may be shared across threads.
"""

from __future__ import annotations

import os
import socket
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from batchguard.core.enums import Command, ObjectKind, RequestKind
from batchguard.core.settings import VerifierSettings, get_settings
from batchguard.definitions.table import DefinitionTable
from batchguard.verification.acl import resolve_fqdn


def _default_resources() -> DefinitionTable:
    from batchguard.definitions.builtin import RESOURCES

    return RESOURCES


def _default_reservation_attributes() -> DefinitionTable:
    from batchguard.definitions.builtin import RESERVATION_ATTRIBUTES

    return RESERVATION_ATTRIBUTES


@dataclass(frozen=True)
class VerificationContext:
    """
    Request identity plus injected configuration.

    Attributes:
        request: Batch request kind the attribute arrived with
        object_kind: Entity the attribute belongs to
        command: Manager command, if any
        resources: General resource definitions
        reservation_attributes: Reservation-scoped attribute definitions
        max_licenses: Ceiling for license bounds
        depend_max_len: Longest accepted dependency expansion
        path_max_len: Longest accepted normalized path
        job_name_max_len: Longest accepted job/reservation name
        max_array_size: Exclusive bound for array indices
        server_name: Suffix for bare job ids in dependencies
        local_host: Host prefixed to host-less paths
        working_directory: Base for relative paths
        acl_host_check: Resolve ACL hosts (False skips the check)
        resolve_host: ``host -> fully qualified name``; raises OSError on failure
    """

    request: RequestKind
    object_kind: ObjectKind = ObjectKind.JOB
    command: Command = Command.NONE
    resources: DefinitionTable = field(default_factory=_default_resources)
    reservation_attributes: DefinitionTable = field(default_factory=_default_reservation_attributes)
    max_licenses: int = 10_000_000
    depend_max_len: int = 2040
    path_max_len: int = 1024
    job_name_max_len: int = 236
    max_array_size: int = 10_000
    server_name: str = field(default_factory=socket.gethostname)
    local_host: str = field(default_factory=socket.gethostname)
    working_directory: str = field(default_factory=os.getcwd)
    acl_host_check: bool = True
    resolve_host: Callable[[str], str] = resolve_fqdn

    @classmethod
    def from_settings(
        cls,
        request: RequestKind,
        object_kind: ObjectKind = ObjectKind.JOB,
        command: Command = Command.NONE,
        settings: VerifierSettings | None = None,
        **overrides: Any,
    ) -> VerificationContext:
        """Build a context with limits taken from ``settings`` (cached settings by default)."""
        settings = settings or get_settings()
        values: dict[str, Any] = {
            "max_licenses": settings.max_licenses,
            "depend_max_len": settings.depend_max_len,
            "path_max_len": settings.path_max_len,
            "job_name_max_len": settings.job_name_max_len,
            "max_array_size": settings.max_array_size,
            "server_name": settings.server_name,
            "acl_host_check": settings.acl_host_check,
        }
        values.update(overrides)
        return cls(request=request, object_kind=object_kind, command=command, **values)

    def for_request(
        self,
        request: RequestKind,
        object_kind: ObjectKind | None = None,
        command: Command | None = None,
    ) -> VerificationContext:
        """Same configuration, different request identity."""
        return replace(
            self,
            request=request,
            object_kind=object_kind or self.object_kind,
            command=command or self.command,
        )
