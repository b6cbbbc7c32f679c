"""
Signature endpoint. Greeting only: identifies which deployment role answered.
Contract operations are served by routes/contract.py when enabled.
"""
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["signature"])


@router.get("/api/signature/get", response_class=PlainTextResponse)
def get_signature(request: Request) -> str:
    # Unset ROLE renders as "None", like the JS service rendered "undefined"
    return f"Hello World! I am {request.app.state.settings.role}"
