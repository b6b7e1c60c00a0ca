"""Definition tables and the datatype checkers their entries use."""

from batchguard.definitions.table import DefinitionTable, ResourceDefinition

__all__ = ["DefinitionTable", "ResourceDefinition"]
