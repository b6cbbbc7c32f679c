"""
FastAPI application for the smart legal contract signature service.

Routes:
- GET /api/signature/get      greeting with the deployment role
- GET /health                 heartbeat
- /api/contract/...           contract operations (ENABLE_CONTRACT_API=true only)

The contract engine itself is external; startup.py resolves it and builds the
orchestrator that the contract routes dispatch into.
"""
from fastapi import FastAPI, status, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging
import uuid
import time
from contextvars import ContextVar

from signature_api.startup import build_orchestrator
from signature_api.public.routes import health, signature
from signature_api.public.middleware.audit_logging import AuditLoggingMiddleware
from signature_api.public.schemas import ErrorResponse
from signature_api.public.settings import settings, AppSettings

# Context var for trace_id (used in logging)
trace_id_ctx: ContextVar[str] = ContextVar('trace_id', default='-')


# Logging filter to inject trace_id into all log records
class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = trace_id_ctx.get()
        return True


def configure_logging(level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format='[%(trace_id)s] %(levelname)s %(name)s: %(message)s',
        )

    for handler in logging.root.handlers:
        if not any(isinstance(f, TraceIdFilter) for f in handler.filters):
            handler.addFilter(TraceIdFilter())


def _trace_id_for(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or request.headers.get("X-Request-ID") or str(uuid.uuid4())


def create_app(app_settings: AppSettings = settings) -> FastAPI:
    configure_logging(app_settings.log_level)

    app = FastAPI(
        title="SLC Signature API",
        description="Forward requests into a smart legal contract engine and persist its state.",
        version=app_settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = app_settings
    app.state.orchestrator = None

    @app.on_event("startup")
    def _startup():
        app.state.orchestrator = build_orchestrator(app_settings)

    # Trace ID middleware (sets request.state.trace_id and adds response headers)
    @app.middleware("http")
    async def add_trace_id_middleware(request: Request, call_next):
        trace_id = _trace_id_for(request)
        request.state.trace_id = trace_id

        token = trace_id_ctx.set(trace_id)
        try:
            start = time.perf_counter()
            response = await call_next(request)
            process_time = time.perf_counter() - start

            response.headers["X-Request-ID"] = trace_id
            response.headers["X-Process-Time"] = str(process_time)
            return response
        finally:
            trace_id_ctx.reset(token)

    if app_settings.enable_audit_logging:
        app.add_middleware(AuditLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(signature.router)

    # The greeting route stays the only business route unless explicitly enabled.
    if app_settings.enable_contract_api:
        from signature_api.public.routes.contract import router as contract_router
        app.include_router(contract_router)

    # HTTPException handler (wraps all HTTPException into ErrorResponse format)
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict):
            err = exc.detail
        else:
            err = {"code": str(exc.detail), "message": str(exc.detail)}

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(trace_id=_trace_id_for(request), error=err).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                trace_id=_trace_id_for(request),
                error={
                    "code": "REQUEST_VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "detail": jsonable_encoder(exc.errors()),
                },
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logging.getLogger(__name__).exception("Unhandled error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                trace_id=_trace_id_for(request),
                error={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
            ).model_dump(),
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "signature_api.public.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development"
    )
