"""Tests for response envelopes and the error taxonomy."""

from __future__ import annotations

import pytest

from contract_kits.slc.envelope import ErrorCode, ErrorTaxonomy, make_response


class TestMakeResponse:

    def test_success_has_content_and_no_error_code(self):
        env = make_response(True, {"ok": 1})
        assert env == {"success": True, "content": {"ok": 1}}
        assert "errorCode" not in env

    def test_failure_carries_code_and_error(self):
        env = make_response(False, "boom", ErrorCode.CLAUSE_EXECUTION_DENIED)
        assert env == {"success": False, "errorCode": "CLAUSE_EXECUTION_DENIED", "error": "boom"}

    def test_failure_accepts_plain_string_code(self):
        env = make_response(False, "x", "SAVE_STATE_ERROR")
        assert env["errorCode"] == "SAVE_STATE_ERROR"

    def test_failure_without_code_is_rejected(self):
        with pytest.raises(ValueError):
            make_response(False, "x")

    def test_failure_with_unknown_code_is_rejected(self):
        with pytest.raises(ValueError):
            make_response(False, "x", "NOT_A_CODE")


class TestErrorTaxonomy:

    def test_five_codes(self):
        assert sorted(ErrorTaxonomy.all_codes()) == sorted([
            "REQUEST_NOT_FOUND",
            "CLAUSE_EXECUTION_FAILED",
            "CLAUSE_EXECUTION_DENIED",
            "CONTRACT_INITIALIZATION_FAILED",
            "SAVE_STATE_ERROR",
        ])

    def test_every_code_is_classified(self):
        for code in ErrorTaxonomy.all_codes():
            assert ErrorTaxonomy.classify(code)["severity"] != "unknown"

    def test_unknown_code(self):
        assert ErrorTaxonomy.classify("WHATEVER")["severity"] == "unknown"
