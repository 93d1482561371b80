"""Failure taxonomy and error envelopes for repository checks."""

from enum import Enum
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Why a repository check did not produce metadata."""

    INVALID_FORMAT = "invalid_format"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    MALFORMED_REFERENCE = "malformed_reference"
    API_ERROR = "api_error"
    UNEXPECTED_STATUS = "unexpected_status"
    INVALID_RESPONSE = "invalid_response"
    TIMEOUT = "timeout"
    NETWORK = "network"

    @property
    def retryable(self) -> bool:
        """True when repeating the same call later may succeed."""
        return self in _RETRYABLE

    @property
    def needs_credential(self) -> bool:
        """True when only a new or broader access token can fix the failure."""
        return self in (FailureKind.UNAUTHORIZED, FailureKind.FORBIDDEN)


_RETRYABLE = frozenset({FailureKind.TIMEOUT, FailureKind.NETWORK, FailureKind.API_ERROR})

# Status codes the hosting API uses with a documented meaning
STATUS_FAILURES: Dict[int, FailureKind] = {
    401: FailureKind.UNAUTHORIZED,
    403: FailureKind.FORBIDDEN,
    404: FailureKind.NOT_FOUND,
    422: FailureKind.MALFORMED_REFERENCE,
}

MESSAGES: Dict[FailureKind, str] = {
    FailureKind.INVALID_FORMAT: "invalid URL format",
    FailureKind.UNAUTHORIZED: "access token invalid or expired",
    FailureKind.FORBIDDEN: "access denied: insufficient token scope or rate limit reached",
    FailureKind.NOT_FOUND: "repository does not exist or is not accessible",
    FailureKind.MALFORMED_REFERENCE: "malformed repository reference",
    FailureKind.API_ERROR: "hosting API error (status {code})",
    FailureKind.UNEXPECTED_STATUS: "unexpected status code {code}",
    FailureKind.INVALID_RESPONSE: "unexpected response payload",
    FailureKind.TIMEOUT: "request timed out",
    FailureKind.NETWORK: "network error: {detail}",
}


def failure_for_status(status_code: int) -> FailureKind:
    """Maps an HTTP error status to its failure kind."""
    return STATUS_FAILURES.get(status_code, FailureKind.API_ERROR)


def describe_failure(kind: FailureKind, code: Optional[int] = None, detail: str = "") -> str:
    """
    Renders the human-readable message for a failure.

    Args:
        kind: Failure kind
        code: HTTP status code, for kinds that report one
        detail: Transport error text, for network failures

    Returns:
        Message string
    """
    return MESSAGES[kind].format(code=code, detail=detail)


def create_error_response(message: str) -> Dict[str, Any]:
    """
    Creates standardized error response.

    Args:
        message: Error description

    Returns:
        Dict with status="error" and message
    """
    logger.error(f"Error response: {message}")
    return {
        "status": "error",
        "message": message
    }
