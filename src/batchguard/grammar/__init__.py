"""
Grammar parsers consumed by the verifiers.

Stateless functions that decompose a raw value string into structured
sub-values or raise :class:`GrammarError`.
"""

from batchguard.grammar.exceptions import GrammarError
from batchguard.grammar.lists import parse_at_list, parse_depend_list, parse_stage_list
from batchguard.grammar.names import (
    NameCheck,
    RangeCheck,
    check_array_range,
    check_job_name,
    is_resource_name,
)
from batchguard.grammar.paths import prepare_path
from batchguard.grammar.select import Chunk, parse_chunk, split_plus_spec

__all__ = [
    "Chunk",
    "GrammarError",
    "NameCheck",
    "RangeCheck",
    "check_array_range",
    "check_job_name",
    "is_resource_name",
    "parse_at_list",
    "parse_chunk",
    "parse_depend_list",
    "parse_stage_list",
    "prepare_path",
    "split_plus_spec",
]
