"""
Pydantic models for request/response validation.
These define the exact contract between client and API.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, Dict, Any, List, Literal
from datetime import datetime

from contract_kits.slc.envelope import ErrorCode


class ContractEnvelope(BaseModel):
    """Uniform result of a contract operation."""
    success: bool = Field(..., description="True if the operation went through")
    content: Optional[Any] = Field(None, description="Engine response (success only)")
    error: Optional[Any] = Field(None, description="Error detail (failure only)")
    errorCode: Optional[ErrorCode] = Field(None, description="Error code (failure only)")

    @model_validator(mode="after")
    def _error_code_iff_failure(self):
        if self.success and self.errorCode is not None:
            raise ValueError("errorCode must be absent on success")
        if not self.success and self.errorCode is None:
            raise ValueError("errorCode is required on failure")
        return self


class ContractOperationRequest(BaseModel):
    """Body of contract operation endpoints."""
    persist: bool = Field(True, description="If False, the resulting state is not written to state.json")


class ClauseListResponse(BaseModel):
    clauses: List[str] = Field(..., description="Clause names that can be triggered")


class ErrorResponse(BaseModel):
    """Standard error response."""
    trace_id: str = Field(..., description="Unique request ID")
    status: Literal["error"] = Field(default="error", description="Always 'error'")
    error: Dict[str, Any] = Field(..., description="Error details with 'code', 'message'")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="'ok' if healthy")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    commit: str = Field(..., description="Git commit hash")
    timestamp: datetime = Field(..., description="Current time (ISO8601)")
