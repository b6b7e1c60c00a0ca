"""
Select specification grammar.

A select spec is one or more ``+``-joined chunks; each chunk is an optional
count followed by ``:``-joined ``resource=value`` pairs::

    2:ncpus=4:mem=8gb+1:ncpus=1:host="node:01"

Quoted values may contain ``:`` and ``+``.
"""

from __future__ import annotations

from dataclasses import dataclass

from batchguard.grammar.exceptions import GrammarError
from batchguard.grammar.names import is_resource_name


@dataclass(frozen=True)
class Chunk:
    """One decoded chunk: its count and its pairs in written order."""

    count: int
    pairs: tuple[tuple[str, str], ...]


def _split_unquoted(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
            current.append(ch)
        elif ch in "\"'":
            quote = ch
            current.append(ch)
        elif ch == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    if quote:
        raise GrammarError(f"unbalanced quote in {text!r}")
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def split_plus_spec(value: str) -> list[str]:
    """Split on ``+`` outside quotes; empty segments are an error."""
    chunks = _split_unquoted(value, "+")
    if any(not chunk for chunk in chunks):
        raise GrammarError(f"empty chunk in {value!r}")
    return chunks


def parse_chunk(chunk: str) -> Chunk:
    """Decode ``[N:]res=val[:res=val...]``."""
    elements = _split_unquoted(chunk, ":")
    count = 1
    if elements[0].isascii() and elements[0].isdigit():
        count = int(elements[0])
        elements = elements[1:]
        if count < 1:
            raise GrammarError(f"chunk count must be positive in {chunk!r}")
    if not elements:
        raise GrammarError(f"no resources in chunk {chunk!r}")
    pairs = []
    for element in elements:
        key, sep, value = element.partition("=")
        if not sep or not is_resource_name(key) or not value:
            raise GrammarError(f"bad resource request {element!r}")
        pairs.append((key, _unquote(value)))
    return Chunk(count, tuple(pairs))
