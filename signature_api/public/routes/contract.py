"""Contract operation endpoints.

Mounted only when ENABLE_CONTRACT_API=true. Each call maps one-to-one onto an
orchestrator operation and returns its envelope as-is with HTTP 200: the
envelope's success/errorCode is the result, not the status code.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from contract_kits.slc import ContractOrchestrator
from ..schemas import ClauseListResponse, ContractEnvelope, ContractOperationRequest

router = APIRouter(tags=["contract"])


def get_orchestrator(request: Request) -> ContractOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=503,
            detail={"code": "ORCHESTRATOR_NOT_READY", "message": "Contract orchestrator is not configured."},
        )
    return orchestrator


@router.get("/api/contract/clauses", response_model=ClauseListResponse)
def list_clauses(orchestrator: ContractOrchestrator = Depends(get_orchestrator)) -> ClauseListResponse:
    return ClauseListResponse(clauses=orchestrator.clauses.names())


@router.post(
    "/api/contract/init",
    response_model=ContractEnvelope,
    response_model_exclude_unset=True,
)
async def init_contract(
    body: Optional[ContractOperationRequest] = None,
    orchestrator: ContractOrchestrator = Depends(get_orchestrator),
) -> dict:
    persist = body.persist if body is not None else True
    return await orchestrator.init_contract(persist=persist)


@router.post(
    "/api/contract/clauses/{clause_name}",
    response_model=ContractEnvelope,
    response_model_exclude_unset=True,
)
async def trigger_clause(
    clause_name: str,
    body: Optional[ContractOperationRequest] = None,
    orchestrator: ContractOrchestrator = Depends(get_orchestrator),
) -> dict:
    persist = body.persist if body is not None else True
    return await orchestrator.make_request(clause_name, persist=persist)
