"""
Definition tables: name → datatype and value checkers.

A :class:`DefinitionTable` is built once at import time and never mutated.
Two instances exist in :mod:`batchguard.definitions.builtin`: the general
resource table and the reservation attribute table.

Absence from a table is not an error. Custom resources are known only to the
server and are validated there, so lookups return None and callers accept the
value.

Examples:
    >>> from batchguard.definitions.datatypes import verify_long
    >>> table = DefinitionTable("demo", [ResourceDefinition("ncpus", verify_long)])
    >>> table.find("ncpus").name
    'ncpus'
    >>> table.find("foo") is None
    True

Tags:
    definitions, resources, lookup-table, batchguard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from batchguard.core.result import Result

if TYPE_CHECKING:
    from batchguard.verification.attributes import AttributeValue
    from batchguard.verification.context import VerificationContext


DatatypeChecker = Callable[["AttributeValue"], Result[str | None]]
ValueChecker = Callable[["VerificationContext", "AttributeValue"], Result[str | None]]


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Checkers for one resource or attribute.

    ``datatype_checker`` always runs first; ``value_checker`` runs only when
    the datatype check passed, so it may assume a well-typed value.
    """

    name: str
    datatype_checker: DatatypeChecker | None = None
    value_checker: ValueChecker | None = None
    datatype: str = "string"
    description: str = ""


class DefinitionTable:
    """Immutable name → :class:`ResourceDefinition` mapping."""

    def __init__(self, name: str, definitions: Iterable[ResourceDefinition]):
        entries: dict[str, ResourceDefinition] = {}
        for definition in definitions:
            if definition.name in entries:
                raise ValueError(f"Definition '{definition.name}' is already in table '{name}'")
            entries[definition.name] = definition
        self.name = name
        self._definitions = MappingProxyType(entries)

    def find(self, name: str) -> ResourceDefinition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        return sorted(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[ResourceDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"DefinitionTable({self.name!r}, {len(self)} entries)"
