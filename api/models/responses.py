"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-vault-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for GET /root: the server's current Merkle root."""

    root: str = Field(..., description="0x-prefixed hex root of the current snapshot")
    file_count: int = Field(..., description="Number of files in the snapshot")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
