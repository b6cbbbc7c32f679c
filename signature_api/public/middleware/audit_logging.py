"""
Audit logging middleware for FastAPI.

This middleware:
1. Reuses or generates a request ID
2. Hashes request payload (never stores it)
3. Logs one structured JSON audit entry per request

Usage:
    app.add_middleware(AuditLoggingMiddleware)
"""

import json
import hashlib
import time
import logging
from uuid import uuid4
from typing import Optional, Dict, Any
from datetime import datetime

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class AuditLogger:
    """Structured audit logger."""

    def __init__(self, name: str = "audit"):
        self.logger = logging.getLogger(name)

    @staticmethod
    def hash_payload(payload: bytes) -> str:
        """Create SHA-256 hash of request payload."""
        if not payload:
            return "sha256:empty"
        h = hashlib.sha256(payload).hexdigest()
        return f"sha256:{h[:16]}..."

    @staticmethod
    def error_code_for_status(status_code: int) -> Optional[str]:
        if status_code < 400:
            return None
        if status_code == 404:
            return "NOT_FOUND"
        if status_code == 422:
            return "VALIDATION_ERROR"
        if status_code == 503:
            return "SERVICE_UNAVAILABLE"
        if status_code >= 500:
            return "SERVER_ERROR"
        return "CLIENT_ERROR"

    def create_audit_entry(
        self,
        request_id: str,
        endpoint: str,
        http_method: str,
        http_status: int,
        latency_ms: float,
        payload_hash: str,
        error_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a structured audit log entry."""
        return {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "request_id": request_id,
            "endpoint": endpoint,
            "http_method": http_method,
            "http_status": http_status,
            "latency_ms": round(latency_ms, 3),
            "payload_hash": payload_hash,
            "error_code": error_code,
        }

    def log_entry(self, entry: Dict[str, Any]):
        self.logger.info(json.dumps(entry))


class AuditLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every API call with an audit trail.

    Contract envelopes carry their own errorCode in the body; the audit line
    only records the HTTP-level outcome.
    """

    def __init__(self, app, enable_logging: bool = True):
        super().__init__(app)
        self.audit_logger = AuditLogger()
        self.enable_logging = enable_logging

    async def dispatch(self, request: Request, call_next) -> Response:
        # Shared with the trace-id middleware through request.state so the
        # response header, log prefix and error body carry one id
        request_id = getattr(request.state, "trace_id", None) or request.headers.get("X-Request-ID") or str(uuid4())
        request.state.trace_id = request_id

        body = await request.body()
        payload_hash = self.audit_logger.hash_payload(body)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            if self.enable_logging:
                self.audit_logger.log_entry(self.audit_logger.create_audit_entry(
                    request_id=request_id,
                    endpoint=str(request.url.path),
                    http_method=request.method,
                    http_status=500,
                    latency_ms=(time.perf_counter() - start_time) * 1000,
                    payload_hash=payload_hash,
                    error_code="INTERNAL_ERROR",
                ))
            raise

        if self.enable_logging:
            self.audit_logger.log_entry(self.audit_logger.create_audit_entry(
                request_id=request_id,
                endpoint=str(request.url.path),
                http_method=request.method,
                http_status=response.status_code,
                latency_ms=(time.perf_counter() - start_time) * 1000,
                payload_hash=payload_hash,
                error_code=self.audit_logger.error_code_for_status(response.status_code),
            ))

        response.headers["X-Request-ID"] = request_id
        return response
