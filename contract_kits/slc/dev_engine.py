"""
Development contract engine (for local runs and smoke tests only).

In production the real engine is injected through SLC_ENGINE (see
signature_api/startup.py). This stand-in evaluates no legal logic: it
counts triggers in the state and echoes the request back as the response,
which is enough to exercise load -> trigger -> persist end to end.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .engine import EngineResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DevTemplate:
    name: str
    version: str
    directory: Path


@dataclass(frozen=True)
class DevClause:
    template: DevTemplate
    data: Any


class DevContractEngine:

    async def load_template(self, directory: Path) -> DevTemplate:
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Template directory not found: {directory}")

        name, version = directory.name, "0.0.0"
        package_file = directory / "package.json"
        if package_file.is_file():
            meta = json.loads(package_file.read_text(encoding="utf-8"))
            name = str(meta.get("name") or name)
            version = str(meta.get("version") or version)
        return DevTemplate(name=name, version=version, directory=directory)

    def create_clause(self, template: DevTemplate, data: Any) -> DevClause:
        return DevClause(template=template, data=data)

    async def init(self, clause: DevClause) -> EngineResult:
        state: Dict[str, Any] = {
            "$class": "org.accordproject.runtime.State",
            "template": clause.template.name,
            "triggerCount": 0,
        }
        response = {"message": f"Contract {clause.template.name}@{clause.template.version} initialized"}
        return EngineResult(state=state, response=response)

    async def trigger(self, clause: DevClause, request: Any, state: Any) -> EngineResult:
        if not isinstance(state, dict):
            raise ValueError("Contract state is missing; initialize the contract first.")

        count = int(state.get("triggerCount") or 0) + 1
        new_state = dict(state, triggerCount=count)
        if isinstance(request, dict) and request.get("$class"):
            new_state["lastRequest"] = request["$class"]

        logger.debug(f"[dev-engine] trigger #{count} on {clause.template.name}")
        return EngineResult(state=new_state, response={"request": request, "triggerCount": count})
