"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, VaultException


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST", details: dict[str, Any] | None = None):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details,
        )


class InvalidContentError(APIError):
    """Uploaded content could not be decoded."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCodes.INVALID_CONTENT,
            message=message,
            status_code=400,
        )


class StoredFileNotFoundError(APIError):
    """Requested file is not in the store."""

    def __init__(self, filename: str):
        super().__init__(
            code=ErrorCodes.FILE_NOT_FOUND,
            message=f"File not found: {filename}",
            status_code=404,
            details={"filename": filename},
        )


class EmptyStoreError(APIError):
    """The store holds no files, so there is no tree."""

    def __init__(self, message: str = "No files stored"):
        super().__init__(
            code=ErrorCodes.EMPTY_INPUT,
            message=message,
            status_code=404,
        )


class ProofUnavailableError(APIError):
    """The current tree cannot produce a proof for the file."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            code=ErrorCodes.PROOF_UNAVAILABLE,
            message=f"Cannot generate Merkle proof for {filename}: {reason}",
            status_code=409,
            details={"filename": filename, "reason": reason},
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def vault_error_handler(request: Request, exc: VaultException) -> JSONResponse:
    """Handle domain exceptions that escaped a route as a client error."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
