"""Tests for batchguard.core.result."""

import pytest

from batchguard.core.errors import BadValueError
from batchguard.core.result import Err, Ok


class TestOk:
    def test_inspection(self):
        ok = Ok("oe")
        assert ok.is_ok() and not ok.is_err()
        assert ok.unwrap() == "oe"
        assert ok.unwrap_or("n") == "oe"

    def test_map_and_flat_map(self):
        assert Ok(2).map(lambda x: x * 2).unwrap() == 4
        assert Ok(2).flat_map(lambda x: Err(ValueError(str(x)))).is_err()

    def test_map_err_is_noop(self):
        ok = Ok(1)
        assert ok.map_err(lambda e: RuntimeError()) is ok

    def test_to_dict(self):
        assert Ok("x").to_dict() == {"ok": True, "value": "x"}


class TestErr:
    def test_unwrap_raises(self):
        with pytest.raises(BadValueError):
            Err(BadValueError()).unwrap()

    def test_unwrap_or(self):
        assert Err(BadValueError()).unwrap_or("n") == "n"

    def test_map_short_circuits(self):
        called = []
        result = Err(BadValueError()).map(lambda v: called.append(v))
        assert result.is_err()
        assert called == []

    def test_to_dict_for_verification_error(self):
        d = Err(BadValueError()).to_dict()
        assert d["ok"] is False
        assert d["error"]["code"] == 15014

    def test_to_dict_for_foreign_error(self):
        d = Err(ValueError("boom")).to_dict()
        assert d["error"] == {"error_type": "ValueError", "message": "boom"}

    def test_pattern_matching(self):
        match Err(BadValueError()):
            case Ok(_):
                pytest.fail("matched Ok")
            case Err(error):
                assert isinstance(error, BadValueError)
