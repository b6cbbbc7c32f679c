from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Tuple

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from contract_kits.slc import DEFAULT_CLAUSE_REQUESTS, ContractLayout, ContractOrchestrator, EngineResult


class RecordingEngine:
    """Fake engine: records every call and returns scripted results."""

    def __init__(self):
        self.templates: List[Path] = []
        self.clauses: List[Tuple[Any, Any]] = []
        self.init_calls: List[Any] = []
        self.trigger_calls: List[Tuple[Any, Any, Any]] = []
        self.init_result: Any = EngineResult(state={"balance": 0}, response={"message": "initialized"})
        self.trigger_error: Exception | None = None
        self.trigger_result: Any = None

    async def load_template(self, directory: Path):
        self.templates.append(directory)
        return {"template": str(directory)}

    def create_clause(self, template, data):
        clause = {"template": template, "data": data}
        self.clauses.append((template, data))
        return clause

    async def init(self, clause):
        self.init_calls.append(clause)
        return self.init_result

    async def trigger(self, clause, request, state):
        self.trigger_calls.append((clause, request, state))
        if self.trigger_error is not None:
            raise self.trigger_error
        if self.trigger_result is not None:
            return self.trigger_result
        new_state = dict(state, balance=state.get("balance", 0) + clause["data"].get("rate", 1))
        return {"state": new_state, "response": {"paid": new_state["balance"]}}


def write_json(path: Path, value: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value), encoding="utf-8")
    return path


@pytest.fixture()
def contract_dir(tmp_path) -> Path:
    root = tmp_path / "refrigerated-transportation"
    write_json(root / "state.json", {"balance": 0})
    write_json(root / "data.json", {"rate": 5})
    for clause_name, filename in DEFAULT_CLAUSE_REQUESTS.items():
        write_json(root / "requests" / filename, {"$class": f"org.example.{clause_name}Request"})
    return root


@pytest.fixture()
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture()
def orchestrator(engine, contract_dir) -> ContractOrchestrator:
    return ContractOrchestrator(engine, ContractLayout.from_directory(contract_dir))
