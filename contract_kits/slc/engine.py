"""Contract engine collaborator.

The engine owns everything legal: template parsing, clause evaluation and
state transitions. This kit only needs four things from it:

    template = await engine.load_template(directory)
    clause = engine.create_clause(template, data)
    result = await engine.init(clause)
    result = await engine.trigger(clause, request, state)

init/trigger return something carrying `state` and `response` (an object
with those attributes or a mapping with those keys). A trigger that raises
is a rejection of the request by the contract logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ContractEngine(Protocol):
    async def load_template(self, directory: Path) -> Any:
        ...

    def create_clause(self, template: Any, data: Any) -> Any:
        ...

    async def init(self, clause: Any) -> Any:
        ...

    async def trigger(self, clause: Any, request: Any, state: Any) -> Any:
        ...


@dataclass(frozen=True)
class EngineResult:
    state: Any
    response: Any
    emit: List[Any] = field(default_factory=list)


def normalize_result(res: Any) -> Optional[EngineResult]:
    """Coerce an engine return value into an EngineResult.

    Falsy values (None, {}, False) mean the engine produced nothing and map
    to None.
    """
    if not res:
        return None
    if isinstance(res, EngineResult):
        return res
    if isinstance(res, Mapping):
        return EngineResult(
            state=res.get("state"),
            response=res.get("response"),
            emit=list(res.get("emit") or []),
        )
    return EngineResult(
        state=getattr(res, "state", None),
        response=getattr(res, "response", None),
        emit=list(getattr(res, "emit", None) or []),
    )
