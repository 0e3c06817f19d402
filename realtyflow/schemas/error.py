"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["email"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier")
    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["FORBIDDEN"])
    message: str = Field(..., description="Human-readable error message", examples=["forbidden access"])
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(None, description="Field errors for validation failures")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "application/json": {
            "example": {
                "error": {
                    "code": code,
                    "message": message,
                    "timestamp": "2024-01-01T00:00:00Z",
                    "request_id": "abc12345"
                }
            }
        }
    }


COMMON_ERROR_RESPONSES = {
    401: {
        "description": "Unauthenticated - missing or invalid bearer credential",
        "model": APIErrorResponse,
        "content": _example("UNAUTHENTICATED", "unauthorized access"),
    },
    403: {
        "description": "Forbidden - insufficient role or identity mismatch",
        "model": APIErrorResponse,
        "content": _example("FORBIDDEN", "forbidden access"),
    },
    500: {
        "description": "Internal Server Error",
        "model": APIErrorResponse,
        "content": _example("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    },
}

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Not Found",
        "model": APIErrorResponse,
        "content": _example("NOT_FOUND", "Property not found with ID: 8f14e45f-ceea-467f-a0f6-1d2a5b3c9e10"),
    },
}

TRANSITION_ERROR_RESPONSE = {
    400: {
        "description": "Bad Request - transition not allowed",
        "model": APIErrorResponse,
        "content": _example("BAD_REQUEST", "Offer cannot move from Rejected to Accepted"),
    },
}

UPSTREAM_ERROR_RESPONSE = {
    502: {
        "description": "Upstream Failure - payment gateway or identity provider call failed",
        "model": APIErrorResponse,
        "content": _example("UPSTREAM_FAILURE", "Payment gateway request failed"),
    },
}


def get_common_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses shared by every protected route."""
    return dict(COMMON_ERROR_RESPONSES)


def get_lookup_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for routes that address a single record."""
    return {**COMMON_ERROR_RESPONSES, **NOT_FOUND_RESPONSE}


def get_transition_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for state-changing routes."""
    return {**COMMON_ERROR_RESPONSES, **NOT_FOUND_RESPONSE, **TRANSITION_ERROR_RESPONSE}


def get_upstream_error_responses() -> Dict[int, Dict[str, Any]]:
    return {**COMMON_ERROR_RESPONSES, **UPSTREAM_ERROR_RESPONSE}
