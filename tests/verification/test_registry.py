"""
Tests for the verifier registry and the verify() entry point.

Covers:
- Registration lookup
- Outcome classification (accepted / rejected / fatal)
- Value rewriting on acceptance only
- Legacy integer contract
"""

import pytest

from batchguard.core.enums import Command, ObjectKind, Operator, RequestKind
from batchguard.core.errors import ErrorCode, SystemFailureError
from batchguard.verification import reporter, scalar
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.registry import (
    ATTRIBUTES,
    Outcome,
    VerificationResult,
    VerifierKind,
    run_verifier,
    verifier_for,
    verify,
    verify_legacy,
)


# =============================================================================
# Registration
# =============================================================================


class TestRegistration:
    def test_lookup(self):
        assert verifier_for(ObjectKind.JOB, "Hold_Types") is VerifierKind.HOLD
        assert verifier_for(ObjectKind.SERVER, "managers") is VerifierKind.ACL
        assert verifier_for(ObjectKind.JOB, "Resource_List") is VerifierKind.RESOURCE

    def test_object_kind_matters(self):
        assert verifier_for(ObjectKind.QUEUE, "Hold_Types") is None

    def test_unknown(self):
        assert verifier_for(ObjectKind.JOB, "no_such_attribute") is None

    def test_every_kind_dispatches(self, job_ctx):
        for kind in VerifierKind:
            result = run_verifier(kind, job_ctx, AttributeValue("x", None))
            assert result.is_ok() or result.is_err()

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            ATTRIBUTES[(ObjectKind.JOB, "x")] = VerifierKind.HOLD


# =============================================================================
# Outcomes
# =============================================================================


class TestVerify:
    def test_accepted(self, job_ctx):
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, AttributeValue("Hold_Types", "u"), context=job_ctx)
        assert result.accepted
        assert result.code == ErrorCode.NONE
        assert result.value == "u"

    def test_rejected(self, job_ctx):
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, AttributeValue("Hold_Types", "pn"), context=job_ctx)
        assert result.rejected
        assert result.code == ErrorCode.BADATVAL
        assert result.message is None

    def test_missing_attribute_is_internal(self):
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, None)
        assert result.rejected
        assert result.code == ErrorCode.INTERNAL

    def test_unregistered_attribute_accepted(self, job_ctx):
        attr = AttributeValue("Account_Name", "whatever")
        assert verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx).accepted

    def test_request_kind_overrides_context(self, job_ctx):
        attr = AttributeValue("Priority", "1024")
        assert verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx).rejected
        assert verify(RequestKind.SELECT_JOBS, ObjectKind.JOB, None, attr, context=job_ctx).accepted

    def test_without_context_uses_settings(self, monkeypatch):
        monkeypatch.setenv("BATCHGUARD_MAX_LICENSES", "5")
        attr = AttributeValue("pbs_license_max", "6")
        result = verify(RequestKind.MANAGER, ObjectKind.SERVER, Command.SET, attr)
        assert result.code == ErrorCode.LICENSE_MAX_BADVAL

    def test_select_through_resource_list(self, job_ctx):
        attr = AttributeValue("Resource_List", "1:ncpus=-1", resource="select")
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert result.code == ErrorCode.BADATVAL
        assert result.message == "Illegal attribute or resource value select.ncpus"

    def test_select_accepted_through_resource_list(self, job_ctx):
        attr = AttributeValue("Resource_List", "1:ncpus=2+2:ncpus=1", resource="select")
        assert verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx).accepted

    def test_checkpoint_unset_in_select(self, job_ctx):
        attr = AttributeValue("Checkpoint", "u", op=Operator.LT)
        assert verify(RequestKind.SELECT_JOBS, ObjectKind.JOB, None, attr, context=job_ctx).rejected


class TestRewriting:
    def test_value_replaced_on_acceptance(self, job_ctx):
        attr = AttributeValue("Output_Path", "job.out")
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert result.accepted
        assert attr.value == "login01:/home/alice/job.out"
        assert result.value == attr.value

    def test_value_untouched_on_rejection(self, job_ctx):
        attr = AttributeValue("depend", "afterok:abc")
        verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert attr.value == "afterok:abc"

    def test_rewrite_idempotent(self, job_ctx):
        attr = AttributeValue("depend", "afterany:5")
        verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        once = attr.value
        verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert attr.value == once == "afterany:5.svr.example.com"


class TestFatal:
    """Allocation failure is fatal even when the check itself rejected."""

    def test_message_allocation_failure(self, job_ctx, monkeypatch):
        def exhausted(code):
            raise MemoryError

        monkeypatch.setattr(reporter, "error_text", exhausted)
        attr = AttributeValue("Resource_List", "-1", resource="ncpus")
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert result.fatal
        assert result.code == ErrorCode.SYSTEM
        assert isinstance(result.error, SystemFailureError)
        assert result.as_legacy() == (-1, None)
        assert attr.value == "-1"

    def test_verifier_memory_error(self, job_ctx, monkeypatch):
        def exhausted(ctx, attr):
            raise MemoryError

        monkeypatch.setattr(scalar, "verify_hold", exhausted)
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, AttributeValue("Hold_Types", "u"), context=job_ctx)
        assert result.fatal


# =============================================================================
# Results
# =============================================================================


class TestVerificationResult:
    def test_legacy_accepted(self, job_ctx):
        attr = AttributeValue("Join_Path", "oe")
        assert verify_legacy(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx) == (0, None)

    def test_legacy_rejected(self, job_ctx):
        attr = AttributeValue("Resource_List", "-1", resource="ncpus")
        code, message = verify_legacy(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert code == 15014
        assert message == "Illegal attribute or resource value Resource_List.ncpus"

    def test_from_foreign_exception(self):
        assert VerificationResult.from_error(MemoryError()).fatal
        assert VerificationResult.from_error(ValueError("x")).code == ErrorCode.INTERNAL

    def test_to_dict(self):
        result = VerificationResult(Outcome.ACCEPTED, value="oe")
        assert result.to_dict() == {"outcome": "accepted", "code": 0, "value": "oe"}


class TestErrorContext:
    def test_rejection_carries_request_identity(self, job_ctx):
        attr = AttributeValue("Resource_List", "-1", resource="ncpus")
        result = verify(RequestKind.QUEUE_JOB, ObjectKind.JOB, None, attr, context=job_ctx)
        assert result.error.context.to_dict() == {
            "request": "queue-job",
            "object_kind": "job",
            "attribute": "Resource_List",
            "resource": "ncpus",
        }
