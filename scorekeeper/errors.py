"""
scorekeeper/errors.py
Centralized Error Handling

ERROR RESPONSE STRUCTURE:
{
    "success": false,
    "error": "ErrorType",
    "message": "Human-readable description",
    "code": "UNIQUE_ERROR_CODE",
    "details": {} (optional)
}

HTTP STATUS CODE DISCIPLINE:
- 400: Invalid input / malformed request / duplicate vote
- 404: Resource does not exist (unknown id, inactive or unknown activity code)
- 500: NEVER caused by user input (store failure, bug)
"""

import logging
import uuid
from typing import Optional, Dict, Any, List

from fastapi import status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Bounds of the Integer columns (int4 on PostgreSQL)
INT_COLUMN_MIN = -2 ** 31
INT_COLUMN_MAX = 2 ** 31 - 1


class ErrorCode:
    """Unique error codes for machine-readable error handling"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_INPUT = "INVALID_INPUT"

    NOT_FOUND = "NOT_FOUND"
    ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
    ACTIVITY_INACTIVE = "ACTIVITY_INACTIVE"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"

    DUPLICATE_SCORE = "DUPLICATE_SCORE"
    FEATURE_DISABLED = "FEATURE_DISABLED"

    INTERNAL_ERROR = "INTERNAL_ERROR"
    CODE_GENERATION_FAILED = "CODE_GENERATION_FAILED"


class APIError(Exception):
    """Base API exception with consistent structure"""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.error = error
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        result = {
            "success": False,
            "error": self.error,
            "message": self.message,
            "code": self.code
        }
        if self.details:
            result["details"] = self.details
        return result

    def to_response(self) -> JSONResponse:
        """Convert to FastAPI JSONResponse"""
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


class ValidationError(APIError):
    """400 - Missing or malformed required fields, invalid enum value"""
    def __init__(self, message: str, code: str = ErrorCode.VALIDATION_ERROR, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="ValidationError",
            message=message,
            code=code,
            details=details
        )


class NotFoundError(APIError):
    """404 - Unknown id, inactive or unknown activity code"""
    def __init__(self, message: str, code: str = ErrorCode.NOT_FOUND, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NotFoundError",
            message=message,
            code=code,
            details=details
        )


class ConflictError(APIError):
    """400 - Duplicate vote for the same (activity, judge, target)"""
    def __init__(self, message: str, code: str = ErrorCode.DUPLICATE_SCORE, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="ConflictError",
            message=message,
            code=code,
            details=details
        )


class UnexpectedError(APIError):
    """500 - Store failure or other internal fault. Use sparingly."""
    def __init__(
        self,
        message: str = "An unexpected error occurred. Please try again later.",
        code: str = ErrorCode.INTERNAL_ERROR,
        log_id: Optional[str] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="UnexpectedError",
            message=message,
            code=code,
            details={"log_id": log_id} if log_id else None
        )


def new_log_id() -> str:
    """Short correlation id shared between the log line and the 500 response."""
    return str(uuid.uuid4())[:8]


def log_unexpected(error: Exception, context: str = "") -> UnexpectedError:
    """Log an internal error and build the safe 500 error to raise"""
    log_id = new_log_id()
    logger.error(f"[{log_id}] Internal error in {context}: {type(error).__name__}: {str(error)}")
    return UnexpectedError(log_id=log_id)


def require_text(value: Optional[str], field_name: str) -> str:
    """Validate that a string is present and not blank; returns it trimmed"""
    if value is None or not isinstance(value, str) or value.strip() == "":
        raise ValidationError(
            f"{field_name} is required",
            code=ErrorCode.MISSING_FIELD,
            details={"field": field_name}
        )
    return value.strip()


def require_enum(value: Optional[str], allowed_values: List[str], field_name: str) -> str:
    """Validate that a value is in an allowed list"""
    if value is None or value == "":
        raise ValidationError(
            f"{field_name} is required",
            code=ErrorCode.MISSING_FIELD,
            details={"field": field_name}
        )
    if value not in allowed_values:
        raise ValidationError(
            f"Invalid {field_name}. Must be one of: {', '.join(allowed_values)}",
            code=ErrorCode.INVALID_INPUT,
            details={"field": field_name, "value": value, "allowed": allowed_values}
        )
    return value


def require_int(value: Any, field_name: str) -> int:
    """
    Validate a required signed integer.

    Booleans are rejected even though they subclass int; integral floats
    (e.g. 5.0) and numeric strings are accepted and converted. The result
    must fit the Integer columns it is stored in.
    """
    if value is None or value == "":
        raise ValidationError(
            f"{field_name} is required",
            code=ErrorCode.MISSING_FIELD,
            details={"field": field_name}
        )
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer", details={"field": field_name})

    parsed = None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            pass

    if parsed is None:
        raise ValidationError(
            f"{field_name} must be an integer",
            code=ErrorCode.INVALID_INPUT,
            details={"field": field_name, "value": str(value)}
        )
    if not INT_COLUMN_MIN <= parsed <= INT_COLUMN_MAX:
        raise ValidationError(
            f"{field_name} is out of range",
            code=ErrorCode.INVALID_INPUT,
            details={"field": field_name, "value": str(value),
                     "min": INT_COLUMN_MIN, "max": INT_COLUMN_MAX}
        )
    return parsed


def get_error_summary() -> Dict[str, Any]:
    """Return summary of error handling system for documentation"""
    return {
        "response_structure": {
            "success": "boolean (always false for errors)",
            "error": "string (ValidationError | NotFoundError | ConflictError | UnexpectedError)",
            "message": "string (human-readable)",
            "code": "string (machine-readable)",
            "details": "object (optional)"
        },
        "status_codes": {
            "400": "Validation error or duplicate vote",
            "404": "Resource does not exist",
            "500": "Unexpected internal error"
        },
        "error_codes": [
            attr for attr in dir(ErrorCode)
            if not attr.startswith('_')
        ]
    }
