"""
Custom exception classes for the Realty Flow API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""
    
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Validation error exception."""
    
    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class NotFoundError(APIException):
    """Resource not found exception."""
    
    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"
        
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """Missing or unverifiable credential."""
    
    def __init__(self, detail: str = "unauthorized access"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHENTICATED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Valid credential, insufficient role or identity mismatch."""
    
    def __init__(self, detail: str = "forbidden access"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class BadRequestError(APIException):
    """Bad request exception."""
    
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class UpstreamServiceError(APIException):
    """A store or external service call failed."""
    
    def __init__(self, service: str, detail: Optional[str] = None):
        message = f"{service} request failed"
        if detail:
            message += f": {detail}"
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=message,
            error_code="UPSTREAM_FAILURE"
        )
        self.service = service


# Credential specific exceptions
class TokenExpiredError(UnauthorizedError):
    """JWT token expired exception."""
    
    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid JWT token exception."""
    
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class InsufficientPermissionsError(ForbiddenError):
    """Insufficient permissions exception."""
    
    def __init__(self, action: str):
        super().__init__(f"Insufficient permissions to {action}")


class OwnershipError(ForbiddenError):
    """Subject does not own the resource it is acting on."""
    
    def __init__(self, resource: str = "resource"):
        super().__init__(f"You don't own this {resource}")


# Lifecycle exceptions
class InvalidTransitionError(BadRequestError):
    """A state machine was asked for a transition it does not allow."""
    
    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"{entity} cannot move from {current} to {target}")
        self.current = current
        self.target = target


class BusinessRuleViolationError(BadRequestError):
    """Business rule violation exception."""
    
    def __init__(self, rule: str, detail: Optional[str] = None):
        message = f"Business rule violation: {rule}"
        if detail:
            message += f" - {detail}"
        super().__init__(message)
