"""
Response envelopes and error taxonomy for contract operations.

Every orchestrator operation returns one of two shapes:
- success: {"success": True, "content": ...}
- failure: {"success": False, "errorCode": <code>, "error": ...}

errorCode is present iff success is False, and is always one of the
ErrorCode values below.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    CLAUSE_EXECUTION_FAILED = "CLAUSE_EXECUTION_FAILED"
    CLAUSE_EXECUTION_DENIED = "CLAUSE_EXECUTION_DENIED"
    CONTRACT_INITIALIZATION_FAILED = "CONTRACT_INITIALIZATION_FAILED"
    SAVE_STATE_ERROR = "SAVE_STATE_ERROR"


class ErrorTaxonomy:
    """Map error codes to operator-facing descriptions."""

    CATEGORIES = {
        ErrorCode.REQUEST_NOT_FOUND: {
            'severity': 'medium',
            'pattern': 'Clause name has no request file in the clause table',
            'business_impact': 'Nothing was sent to the contract; state is unchanged',
        },
        ErrorCode.CLAUSE_EXECUTION_FAILED: {
            'severity': 'high',
            'pattern': 'Request assembly failed (missing file, bad JSON) or the engine returned nothing',
            'business_impact': 'Clause did not run; state is unchanged',
        },
        ErrorCode.CLAUSE_EXECUTION_DENIED: {
            'severity': 'medium',
            'pattern': 'Engine rejected the triggered clause',
            'business_impact': 'Contract logic refused the request; state is unchanged',
        },
        ErrorCode.CONTRACT_INITIALIZATION_FAILED: {
            'severity': 'critical',
            'pattern': 'Contract data or template could not be loaded, or engine init failed',
            'business_impact': 'Contract has no initial state; clauses cannot be triggered',
        },
        ErrorCode.SAVE_STATE_ERROR: {
            'severity': 'critical',
            'pattern': 'Writing state.json failed after the engine succeeded',
            'business_impact': 'Engine result was discarded; persisted state is the previous one',
        },
    }

    @classmethod
    def classify(cls, error_code: str) -> dict:
        """
        Retrieve category info for an error code.

        Unknown codes get a generic 'unknown' entry instead of raising.
        """
        try:
            return cls.CATEGORIES[ErrorCode(error_code)]
        except ValueError:
            return {
                'severity': 'unknown',
                'pattern': 'Unknown error code',
                'business_impact': 'See logs for details',
            }

    @classmethod
    def all_codes(cls) -> list:
        return [code.value for code in ErrorCode]


def make_response(success: bool, content: Any, code: Optional[ErrorCode] = None) -> Dict[str, Any]:
    """Build the envelope returned to callers.

    Args:
        success: True when everything went well, False on error or refusal
        content: payload on success, error detail on failure
        code: error code, required when success is False
    """
    if success:
        return {"success": True, "content": content}

    if code is None:
        raise ValueError("an error code is required for a failure envelope")
    return {
        "success": False,
        "errorCode": ErrorCode(code).value,
        "error": content,
    }
