"""Tests for job-name, array-range and resource-name checks."""

import pytest

from batchguard.grammar import NameCheck, RangeCheck, check_array_range, check_job_name, is_resource_name


class TestCheckJobName:
    def test_plain_name(self):
        assert check_job_name("myjob", False, 236) is NameCheck.OK

    def test_leading_digit(self):
        assert check_job_name("1job", False, 236) is NameCheck.MALFORMED
        assert check_job_name("1job", True, 236) is NameCheck.OK

    @pytest.mark.parametrize("value", ["a@b", "a\tb", "a\nb"])
    def test_illegal_characters(self, value):
        assert check_job_name(value, True, 236) is NameCheck.MALFORMED

    def test_too_long_checked_first(self):
        assert check_job_name("@" * 237, True, 236) is NameCheck.TOO_LONG

    def test_exactly_max_len(self):
        assert check_job_name("j" * 236, False, 236) is NameCheck.OK


class TestCheckArrayRange:
    @pytest.mark.parametrize("value", ["0-9", "1-100:5", "0-9999"])
    def test_ok(self, value):
        assert check_array_range(value, 10_000) is RangeCheck.OK

    @pytest.mark.parametrize("value", ["9-0", "5-5", "0-10000", "0-9:0"])
    def test_out_of_range(self, value):
        assert check_array_range(value, 10_000) is RangeCheck.OUT_OF_RANGE

    @pytest.mark.parametrize("value", ["5", "a-b", "0-9:", "-1-5", "0-9:2:3"])
    def test_malformed(self, value):
        assert check_array_range(value, 10_000) is RangeCheck.MALFORMED


class TestIsResourceName:
    def test_valid(self):
        assert is_resource_name("ncpus")
        assert is_resource_name("my_res-2")

    @pytest.mark.parametrize("value", ["", "1cpu", "a.b", "a b"])
    def test_invalid(self, value):
        assert not is_resource_name(value)
