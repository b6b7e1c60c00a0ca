"""
List grammars: user/host lists, staging lists and dependency lists.

These parsers only decompose and check shape; the verifiers decide which
request kinds get which options.
"""

from __future__ import annotations

import re

from batchguard.grammar.exceptions import GrammarError

DEPEND_TYPES = frozenset(
    {
        "after",
        "afterok",
        "afternotok",
        "afterany",
        "before",
        "beforeok",
        "beforenotok",
        "beforeany",
        "on",
        "runone",
    }
)

_JOB_ID = re.compile(r"\d+(?:\[\d*\])?(?:\.[A-Za-z0-9][A-Za-z0-9_.-]*)?", re.ASCII)


def parse_at_list(value: str, unique_hosts: bool, absolute_path: bool) -> list[tuple[str, str | None]]:
    """Parse ``name[@host][,name[@host]...]``.

    Args:
        value: The raw list.
        unique_hosts: Reject a host (or the host-less default) named twice.
        absolute_path: Require every name to be an absolute path.

    Returns:
        ``(name, host)`` pairs; host is None when no ``@`` was given.

    Raises:
        GrammarError: On an empty entry, empty name or host, embedded
            whitespace, relative path or repeated host.
    """
    entries: list[tuple[str, str | None]] = []
    seen: set[str | None] = set()
    for raw in value.split(","):
        entry = raw.strip()
        if not entry or any(ch.isspace() for ch in entry):
            raise GrammarError(f"bad list entry {raw!r}")
        name, sep, host = entry.partition("@")
        if not name or (sep and not host):
            raise GrammarError(f"bad list entry {raw!r}")
        if absolute_path and not name.startswith("/"):
            raise GrammarError(f"{name!r} is not an absolute path")
        key = host.lower() if sep else None
        if unique_hosts:
            if key in seen:
                raise GrammarError(f"host {host or '(default)'} listed twice")
            seen.add(key)
        entries.append((name, host if sep else None))
    return entries


def parse_stage_list(value: str) -> list[tuple[str, str, str]]:
    """Parse ``local@host:remote[,local@host:remote...]``."""
    entries = []
    for raw in value.split(","):
        local, at, rest = raw.strip().partition("@")
        host, colon, remote = rest.partition(":")
        if not (local and at and host and colon and remote):
            raise GrammarError(f"bad stage entry {raw!r}")
        entries.append((local, host, remote))
    return entries


def parse_depend_list(value: str, server: str, max_len: int) -> str:
    """Parse and expand ``type:arg[:arg...][,type:arg...]``.

    Job ids without a server suffix are qualified with ``.server``; ``on``
    takes a single count. The expansion is returned and must be shorter than
    ``max_len``. Parsing an expansion again returns it unchanged.
    """
    clauses = []
    for clause in value.split(","):
        dtype, *args = clause.split(":")
        if dtype not in DEPEND_TYPES or not args or not all(args):
            raise GrammarError(f"bad dependency {clause!r}")
        if dtype == "on":
            if len(args) != 1 or not (args[0].isascii() and args[0].isdigit()):
                raise GrammarError(f"bad dependency count {clause!r}")
            clauses.append(f"on:{args[0]}")
            continue
        expanded = []
        for job_id in args:
            if not _JOB_ID.fullmatch(job_id):
                raise GrammarError(f"bad job id {job_id!r}")
            expanded.append(job_id if "." in job_id else f"{job_id}.{server}")
        clauses.append(":".join([dtype, *expanded]))
    result = ",".join(clauses)
    if len(result) >= max_len:
        raise GrammarError("dependency list too long")
    return result
