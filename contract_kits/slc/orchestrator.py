"""
Smart Legal Contract Kit - Orchestrator

Loads contract artifacts from disk, hands them to the contract engine and
persists the state the engine returns.

Exposes two operations:
- init_contract(persist=True): build the initial contract state
- make_request(clause_name, persist=True): trigger one clause against the
  persisted state

Neither operation raises. Every outcome is a response envelope (see
envelope.py); errors carry the message of what actually went wrong.

State access is serialized per orchestrator: the read of state.json, the
engine call and the write back happen under one lock, so overlapping
requests apply one after the other instead of overwriting each other.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Dict, Optional

from .clauses import ClauseTable
from .engine import ContractEngine, EngineResult, normalize_result
from .envelope import ErrorCode, make_response
from .storage import ContractLayout, ContractStorage

logger = logging.getLogger(__name__)


class EngineTimeout(Exception):
    """The engine did not answer within the configured timeout."""


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ContractOrchestrator:
    """Run contract operations for one contract directory."""

    def __init__(
        self,
        engine: ContractEngine,
        layout: ContractLayout,
        clause_table: Optional[ClauseTable] = None,
        engine_timeout: Optional[float] = None,
    ):
        self.engine = engine
        self.layout = layout
        self.storage = ContractStorage(layout)
        self.clauses = clause_table if clause_table is not None else ClauseTable(layout)
        self.engine_timeout = engine_timeout
        self._state_lock = asyncio.Lock()

    @classmethod
    def from_directory(cls, engine: ContractEngine, directory, **kwargs) -> "ContractOrchestrator":
        return cls(engine, ContractLayout.from_directory(directory), **kwargs)

    async def _build_clause(self, data: Any) -> Any:
        template = await self.engine.load_template(Path(self.layout.root))
        return self.engine.create_clause(template, data)

    async def _call_engine(self, call: Awaitable[Any]) -> Any:
        if not self.engine_timeout:
            return await call

        # asyncio.wait leaves the engine's own exceptions (TimeoutError included)
        # on the task, so only our deadline becomes EngineTimeout
        task = asyncio.ensure_future(call)
        try:
            done, _ = await asyncio.wait({task}, timeout=self.engine_timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task not in done:
            task.cancel()
            raise EngineTimeout(f"Contract engine did not answer within {self.engine_timeout}s.")
        return task.result()

    async def init_contract(self, persist: bool = True) -> Dict[str, Any]:
        """Initialize the contract from its static artifacts.

        Args:
            persist: when False the generated state is not written to state.json
        """
        async with self._state_lock:
            try:
                data = self.storage.load_data()
                if not data.ok or data.value is None:
                    detail = data.detail or f"Contract data in {data.path} is empty."
                    logger.error(f"Contract initialization failed: {detail}")
                    return make_response(False, detail, ErrorCode.CONTRACT_INITIALIZATION_FAILED)

                clause = await self._build_clause(data.value)
                res = normalize_result(await self._call_engine(self.engine.init(clause)))
            except EngineTimeout as e:
                logger.error(f"Contract initialization failed: {e}")
                return make_response(False, str(e), ErrorCode.CONTRACT_INITIALIZATION_FAILED)
            except Exception as e:
                logger.error(f"Contract initialization failed: {e}")
                return make_response(False, _describe(e), ErrorCode.CONTRACT_INITIALIZATION_FAILED)

            if res is None:
                logger.error("Contract initialization failed: engine returned no result")
                return make_response(False, "Contract engine returned no result.", ErrorCode.CONTRACT_INITIALIZATION_FAILED)

            if persist and not self.storage.save_state(res.state):
                return make_response(False, "Impossible to save state.", ErrorCode.SAVE_STATE_ERROR)

            logger.info(f"Contract initialized (persist={persist})")
            return make_response(True, res.response)

    async def make_request(self, clause_name: str, persist: bool = True) -> Dict[str, Any]:
        """Trigger a contract clause and store the resulting state.

        Args:
            clause_name: name of the triggered clause (see ClauseTable)
            persist: when False the new state is not written to state.json
        """
        request_path = self.clauses.resolve(clause_name)
        if request_path is None:
            return make_response(
                False,
                f"No request associated to clause {clause_name!r}.",
                ErrorCode.REQUEST_NOT_FOUND,
            )

        async with self._state_lock:
            try:
                loaded = (
                    self.storage.load_state(),
                    self.storage.load_data(),
                    self.storage.load_request(request_path),
                )
                failed = next((r for r in loaded if not r.ok), None)
                if failed is not None:
                    logger.error(f"Request to contract failed: {failed.detail}")
                    return make_response(False, failed.detail, ErrorCode.CLAUSE_EXECUTION_FAILED)
                state, data, request = (r.value for r in loaded)

                clause = await self._build_clause(data)
            except Exception as e:
                logger.error(f"Request to contract failed: {e}")
                return make_response(False, _describe(e), ErrorCode.CLAUSE_EXECUTION_FAILED)

            try:
                raw = await self._call_engine(self.engine.trigger(clause, request, state))
            except EngineTimeout as e:
                logger.error(f"Request to contract failed: {e}")
                return make_response(False, str(e), ErrorCode.CLAUSE_EXECUTION_FAILED)
            except Exception as e:
                logger.warning(f"Clause {clause_name} denied: {e}")
                return make_response(False, _describe(e), ErrorCode.CLAUSE_EXECUTION_DENIED)

            res: Optional[EngineResult] = normalize_result(raw)
            if res is None:
                logger.error(f"Clause {clause_name} failed: engine returned no result")
                return make_response(False, "Contract engine returned no result.", ErrorCode.CLAUSE_EXECUTION_FAILED)

            if persist and not self.storage.save_state(res.state):
                return make_response(False, "Impossible to save state.", ErrorCode.SAVE_STATE_ERROR)

            logger.info(f"Clause {clause_name} executed (persist={persist})")
            return make_response(True, res.response)
