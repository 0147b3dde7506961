from enum import Enum
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    NOT_FOUND_OR_FORBIDDEN = "NOT_FOUND_OR_FORBIDDEN"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    details: Any = None


class ErrorResponse(BaseModel):
    error: ErrorBody


class ApiError(HTTPException):
    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        status_code: int,
        details: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.error_code = code
        self.error_message = message
        self.error_details = details
        super().__init__(status_code=status_code, detail=message, headers=headers)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=ErrorBody(
                code=self.error_code,
                message=self.error_message,
                details=self.error_details,
            )
        )


def validation_error(message: str, details: Any = None) -> ApiError:
    return ApiError(
        ErrorCode.VALIDATION_ERROR,
        message,
        status_code=status.HTTP_400_BAD_REQUEST,
        details=details,
    )


def authentication_failed(message: str = "Not authenticated") -> ApiError:
    return ApiError(
        ErrorCode.AUTHENTICATION_FAILED,
        message,
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def not_found_or_forbidden(message: str = "Wishlist not found") -> ApiError:
    """Absent and inaccessible resources share this error so that callers
    cannot tell whether a private wishlist exists."""
    return ApiError(
        ErrorCode.NOT_FOUND_OR_FORBIDDEN,
        message,
        status_code=status.HTTP_404_NOT_FOUND,
    )


def private_wishlist(message: str = "This wishlist is private") -> ApiError:
    return ApiError(
        ErrorCode.NOT_FOUND_OR_FORBIDDEN,
        message,
        status_code=status.HTTP_403_FORBIDDEN,
    )


def conflict(message: str) -> ApiError:
    return ApiError(
        ErrorCode.CONFLICT,
        message,
        status_code=status.HTTP_409_CONFLICT,
    )


def internal_error(message: str = "An unexpected error occurred") -> ApiError:
    return ApiError(
        ErrorCode.INTERNAL_ERROR,
        message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
