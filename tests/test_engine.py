"""Tests for engine result normalization and the development engine."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from contract_kits.slc.dev_engine import DevContractEngine
from contract_kits.slc.engine import ContractEngine, EngineResult, normalize_result


@pytest.mark.parametrize("res", [None, {}, False, 0])
def test_falsy_results_are_none(res):
    assert normalize_result(res) is None


def test_mapping_result():
    res = normalize_result({"state": {"a": 1}, "response": "ok", "emit": [{"e": 1}]})
    assert res == EngineResult(state={"a": 1}, response="ok", emit=[{"e": 1}])


def test_attribute_result():
    res = normalize_result(SimpleNamespace(state=[1], response={"r": 2}))
    assert res.state == [1]
    assert res.response == {"r": 2}
    assert res.emit == []


def test_dev_engine_satisfies_protocol():
    assert isinstance(DevContractEngine(), ContractEngine)


class TestDevContractEngine:

    @pytest.mark.asyncio
    async def test_reads_template_metadata(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "reefer", "version": "0.3.1"}), encoding="utf-8")
        engine = DevContractEngine()
        template = await engine.load_template(tmp_path)
        assert (template.name, template.version) == ("reefer", "0.3.1")

        res = await engine.init(engine.create_clause(template, {"rate": 5}))
        assert res.state["triggerCount"] == 0
        assert "reefer@0.3.1" in res.response["message"]

    @pytest.mark.asyncio
    async def test_missing_template_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await DevContractEngine().load_template(tmp_path / "nope")

    @pytest.mark.asyncio
    async def test_trigger_counts_and_records_request_class(self, tmp_path):
        engine = DevContractEngine()
        clause = engine.create_clause(await engine.load_template(tmp_path), {})
        res = await engine.trigger(clause, {"$class": "org.x.Req"}, {"triggerCount": 4})
        assert res.state == {"triggerCount": 5, "lastRequest": "org.x.Req"}
        assert res.response["triggerCount"] == 5

    @pytest.mark.asyncio
    async def test_trigger_rejects_missing_state(self, tmp_path):
        engine = DevContractEngine()
        clause = engine.create_clause(await engine.load_template(tmp_path), {})
        with pytest.raises(ValueError):
            await engine.trigger(clause, {}, None)
