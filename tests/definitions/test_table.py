"""Tests for DefinitionTable and ResourceDefinition."""

import pytest

from batchguard.definitions import DefinitionTable, ResourceDefinition
from batchguard.definitions.datatypes import verify_long


@pytest.fixture
def table():
    return DefinitionTable(
        "demo",
        [
            ResourceDefinition("ncpus", verify_long, datatype="long"),
            ResourceDefinition("arch"),
        ],
    )


class TestDefinitionTable:
    def test_find(self, table):
        assert table.find("ncpus").datatype == "long"

    def test_find_unknown_is_none(self, table):
        assert table.find("foo") is None

    def test_lookup_is_case_sensitive(self, table):
        assert table.find("NCPUS") is None

    def test_names_sorted(self, table):
        assert table.names() == ["arch", "ncpus"]

    def test_container_protocol(self, table):
        assert "arch" in table
        assert len(table) == 2
        assert {d.name for d in table} == {"arch", "ncpus"}

    def test_duplicate_rejected(self):
        with pytest.raises(ValueError, match="already in table"):
            DefinitionTable("dup", [ResourceDefinition("a"), ResourceDefinition("a")])

    def test_definition_is_frozen(self, table):
        with pytest.raises(AttributeError):
            table.find("arch").name = "other"
