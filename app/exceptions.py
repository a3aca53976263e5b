# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error reaches the client as one readable sentence plus a code.
# Backend error text is logged where it happens and never sent to clients.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PortfolioException(Exception):
    """
    Base exception for the Portfolio API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        # Kept for logging only, not serialized into responses
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {
            "detail": self.message,
            "code": self.code,
        }


# =============================================================================
# Store Exceptions
# =============================================================================

class StoreUnavailableError(PortfolioException):
    """Raised when a call to the project table fails."""

    def __init__(
        self,
        message: str = "Failed to load projects. Please try again later.",
        operation: str | None = None,
    ):
        super().__init__(
            message=message,
            code="STORE_UNAVAILABLE",
            status_code=503,
            details={"operation": operation} if operation else None,
        )


class ProjectNotFoundError(PortfolioException):
    """Raised when a project ID doesn't exist."""

    def __init__(self, project_id: str):
        super().__init__(
            message="Project not found",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            details={"project_id": project_id},
        )
        self.project_id = project_id


# =============================================================================
# Upload Exceptions
# =============================================================================

class UploadFailedError(PortfolioException):
    """Raised when an image could not be written to storage."""

    def __init__(self, filename: str | None = None):
        super().__init__(
            message="Failed to upload image. Please try again.",
            code="UPLOAD_FAILED",
            status_code=502,
            details={"filename": filename} if filename else None,
        )


class InvalidFileTypeError(PortfolioException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}. Only these image types are supported: {', '.join(allowed)}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={"filename": filename, "allowed_types": allowed},
        )


class FileTooLargeError(PortfolioException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"size_mb": size_mb, "max_mb": max_mb},
        )


class ImageInUseError(PortfolioException):
    """Raised when discarding an image that a saved project still shows."""

    def __init__(self, url: str, project_id: str):
        super().__init__(
            message="Image is still used by a project. Remove it from the project first.",
            code="IMAGE_IN_USE",
            status_code=409,
            details={"url": url, "project_id": project_id},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedEmailError(PortfolioException):
    """Raised when a signed-in account is not the configured admin."""

    def __init__(self, email: str | None = None):
        super().__init__(
            message="Unauthorized email address",
            code="UNAUTHORIZED_EMAIL",
            status_code=403,
            details={"email": email},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """Convert PortfolioException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
