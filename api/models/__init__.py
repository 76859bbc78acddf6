"""API request and response models."""

from api.models.responses import (
    HealthResponse,
    RootResponse,
    ErrorDetail,
    ErrorResponse,
)
from core.schemas.transport import (
    FileResponse,
    ProofStepRecord,
    UploadRequest,
    UploadResponse,
)

__all__ = [
    "UploadRequest",
    "UploadResponse",
    "FileResponse",
    "ProofStepRecord",
    "HealthResponse",
    "RootResponse",
    "ErrorDetail",
    "ErrorResponse",
]
