"""Output/error path normalization."""

from __future__ import annotations

import posixpath

from batchguard.grammar.exceptions import GrammarError


def prepare_path(value: str, host: str, cwd: str, max_len: int) -> str:
    """Normalize ``[host:]path`` to ``host:/absolute/path``.

    A missing host becomes ``host``; a relative path is joined to ``cwd``.
    A colon after the first ``/`` belongs to the path, not to a host prefix.
    The result is a fixed point: preparing it again returns it unchanged.
    """
    head, sep, tail = value.partition(":")
    if sep and "/" not in head:
        if not head:
            raise GrammarError(f"empty host in {value!r}")
        path_host, path = head, tail
    else:
        path_host, path = host, value
    if not path or any(ch in "\n\r" for ch in path):
        raise GrammarError(f"bad path {value!r}")
    if not path.startswith("/"):
        path = posixpath.join(cwd, path)
    result = f"{path_host}:{path}"
    if len(result) > max_len:
        raise GrammarError("path too long")
    return result
