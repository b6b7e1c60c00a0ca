"""Tests for the manager/operator ACL verifier."""

import pytest

from batchguard.core.enums import ObjectKind, RequestKind
from batchguard.core.errors import BadHostError, BadValueError, ErrorCode
from batchguard.verification.acl import resolve_fqdn, verify_acl
from batchguard.verification.attributes import AttributeValue
from batchguard.verification.registry import verify


@pytest.fixture
def mgr_ctx(make_ctx):
    return make_ctx(RequestKind.MANAGER, ObjectKind.SERVER)


def _acl(value):
    return AttributeValue("managers", value)


class TestVerifyAcl:
    def test_fully_qualified_host(self, mgr_ctx):
        assert verify_acl(mgr_ctx, _acl("root@node01.example.com")).is_ok()

    def test_host_compared_case_insensitively(self, mgr_ctx):
        assert verify_acl(mgr_ctx, _acl("root@NODE01.example.com")).is_ok()

    def test_short_name_rejected(self, mgr_ctx):
        result = verify_acl(mgr_ctx, _acl("root@node02"))
        assert isinstance(result.error, BadHostError)
        assert result.error.code == 15008

    def test_unresolvable_host(self, mgr_ctx):
        result = verify_acl(mgr_ctx, _acl("root@nowhere.invalid"))
        assert isinstance(result.error, BadHostError)
        assert isinstance(result.error.cause, OSError)

    def test_wildcard_skips_resolution(self, mgr_ctx):
        assert verify_acl(mgr_ctx, _acl("root@*.example.com,admin@*")).is_ok()

    def test_entries_trimmed(self, mgr_ctx):
        assert verify_acl(mgr_ctx, _acl(" root@node01.example.com , ops@*")).is_ok()

    def test_first_bad_entry_fails_list(self, mgr_ctx):
        assert verify_acl(mgr_ctx, _acl("ops@*,root@nowhere.invalid")).is_err()

    def test_missing_at(self, mgr_ctx):
        assert isinstance(verify_acl(mgr_ctx, _acl("root")).error, BadHostError)

    def test_empty(self, mgr_ctx):
        assert isinstance(verify_acl(mgr_ctx, _acl("")).error, BadValueError)

    def test_host_check_disabled(self, make_ctx):
        ctx = make_ctx(RequestKind.MANAGER, ObjectKind.SERVER, acl_host_check=False)
        assert verify_acl(ctx, _acl("root@nowhere.invalid")).is_ok()


class TestResolveFqdn:
    """The real resolver turns every lookup failure into OSError."""

    @pytest.mark.parametrize("host", ["node..example.com", "a" * 70 + ".example.com"])
    def test_unencodable_host_raises_oserror(self, host):
        with pytest.raises(OSError):
            resolve_fqdn(host)

    @pytest.mark.parametrize("host", ["node..example.com", "a" * 70 + ".example.com"])
    def test_unencodable_host_is_bad_host(self, make_ctx, host):
        ctx = make_ctx(RequestKind.MANAGER, ObjectKind.SERVER, resolve_host=resolve_fqdn)
        result = verify(RequestKind.MANAGER, ObjectKind.SERVER, None, _acl(f"root@{host}"), context=ctx)
        assert result.rejected
        assert result.code == ErrorCode.BADHOST
