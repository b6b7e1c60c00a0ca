"""Tests for the preemption-target verifier."""

import pytest

from batchguard.core.enums import RequestKind
from batchguard.core.errors import BadValueError
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.preempt import TargetEntry, TargetNamespace, parse_entry, verify_preempt_targets


@pytest.fixture
def ctx(make_ctx):
    return make_ctx(RequestKind.MANAGER)


def _targets(value):
    return AttributeValue("preempt_targets", value)


class TestNone:
    @pytest.mark.parametrize("value", ["NONE", "none", "  None"])
    def test_accepted(self, ctx, value):
        assert verify_preempt_targets(ctx, _targets(value)).is_ok()

    @pytest.mark.parametrize("value", ["none extra", "NONEX"])
    def test_not_exact(self, ctx, value):
        assert isinstance(verify_preempt_targets(ctx, _targets(value)).error, BadValueError)


class TestTargets:
    @pytest.mark.parametrize(
        "value",
        [
            "Resource_List.ncpus=4",
            "queue=batch",
            "Resource_List.ncpus=4,queue=batch",
            "queue=a,Resource_List.mem=1gb,queue=b",
            "Resource_List.foo_custom=anything",
        ],
    )
    def test_accepted(self, ctx, value):
        assert verify_preempt_targets(ctx, _targets(value)).is_ok()

    def test_value_unchanged(self, ctx):
        assert verify_preempt_targets(ctx, _targets("queue=batch")).unwrap() == "queue=batch"

    def test_no_keyword(self, ctx):
        assert verify_preempt_targets(ctx, _targets("ncpus=4")).is_err()

    def test_resource_value_rejected(self, ctx):
        result = verify_preempt_targets(ctx, _targets("Resource_List.ncpus=-1"))
        assert result.error.message == "Illegal attribute or resource value"

    def test_queue_value_rejected(self, ctx):
        assert verify_preempt_targets(ctx, _targets("queue=1bad")).is_err()

    @pytest.mark.parametrize("value", ["Resource_Listx.ncpus=4", "Resource_List.ncpus", "queue", "queue,x=1"])
    def test_malformed(self, ctx, value):
        result = verify_preempt_targets(ctx, _targets(value))
        assert isinstance(result.error, BadValueError)
        assert result.error.message is None

    def test_empty(self, ctx):
        assert verify_preempt_targets(ctx, _targets("")).is_err()


class TestParseEntry:
    def test_resource_list(self):
        entry = parse_entry("Resource_List.ncpus=4,queue=b", TargetNamespace.RESOURCE_LIST, 0)
        assert entry == TargetEntry(TargetNamespace.RESOURCE_LIST, "ncpus", "4", 21)

    def test_queue(self):
        entry = parse_entry("x,queue=b", TargetNamespace.QUEUE, 2)
        assert (entry.name, entry.value, entry.end) == ("queue", "b", 9)

    def test_equals_must_precede_comma(self):
        assert parse_entry("queue,a=b", TargetNamespace.QUEUE, 0) is None

    def test_queue_haystack_lowercased(self):
        assert TargetNamespace.QUEUE.haystack("QUEUE=B") == "queue=b"
        assert TargetNamespace.RESOURCE_LIST.haystack("Resource_List.X=1") == "Resource_List.X=1"


class TestScanResumes:
    """An unknown name is skipped and the scan continues with the next entry."""

    def test_unknown_then_failing_resource(self, ctx):
        result = verify_preempt_targets(ctx, _targets("Resource_List.foo=1,Resource_List.ncpus=-1"))
        assert isinstance(result.error, BadValueError)
        assert result.error.message == "Illegal attribute or resource value"

    def test_unknown_then_failing_queue(self, ctx):
        result = verify_preempt_targets(ctx, _targets("queue_limit=1,queue=1bad"))
        assert isinstance(result.error, BadValueError)

    def test_unknown_then_valid(self, ctx):
        assert verify_preempt_targets(ctx, _targets("Resource_List.foo=1,Resource_List.ncpus=2")).is_ok()

    def test_queue_inside_resource_value(self, ctx):
        result = verify_preempt_targets(ctx, _targets("Resource_List.software=myqueue"))
        assert isinstance(result.error, BadValueError)
