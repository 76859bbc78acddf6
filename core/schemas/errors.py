"""
Schemas
File: errors.py

Purpose: Standard error taxonomy across Merkle Vault.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the vault."""

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"

    # Storage
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_FILENAME = "INVALID_FILENAME"
    ROOT_NOT_FOUND = "ROOT_NOT_FOUND"

    # Proofs
    PROOF_UNAVAILABLE = "PROOF_UNAVAILABLE"

    # Transport
    INVALID_CONTENT = "INVALID_CONTENT"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class VaultError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between layers without exceptions,
    e.g. when a CLI command reports a failure in its JSON output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.FILE_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "VaultException":
        """Convert this error model to a raised exception."""
        return VaultException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VaultException(Exception):
    """
    Base exception for all Merkle Vault errors.

    Carries structured error information and can be converted
    to/from VaultError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "VAULT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> VaultError:
        """Convert this exception to a VaultError model."""
        return VaultError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(VaultException):
    """Raised when a tree is built from zero files."""

    def __init__(self, message: str = "Cannot build a Merkle tree from zero files") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
        )


class FileNotFoundException(VaultException):
    """Raised when a named file is absent from a store."""

    def __init__(self, filename: str, details: dict[str, Any] | None = None) -> None:
        full_details = details or {}
        full_details["filename"] = filename
        super().__init__(
            message=f"File not found: {filename}",
            code=ErrorCodes.FILE_NOT_FOUND,
            details=full_details,
        )


class InvalidFileNameException(VaultException):
    """Raised when a file name would escape the store directory."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            message=f"Invalid file name: {filename!r}",
            code=ErrorCodes.INVALID_FILENAME,
            details={"filename": filename},
        )


class RootNotFoundException(VaultException):
    """Raised when no persisted Merkle root exists yet."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"No Merkle root stored at {path}",
            code=ErrorCodes.ROOT_NOT_FOUND,
            details={"path": path},
        )


class TransportException(VaultException):
    """Raised when the server cannot be reached or answers with an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if status_code is not None:
            full_details["status_code"] = status_code
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSPORT_ERROR,
            details=full_details,
            retryable=status_code is None or status_code >= 500,
        )
