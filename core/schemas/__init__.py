"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    EmptyInputException,
    ErrorCodes,
    FileNotFoundException,
    InvalidFileNameException,
    RootNotFoundException,
    TransportException,
    VaultError,
    VaultException,
)

# Wire models
from .transport import (
    FileResponse,
    ProofStepRecord,
    UploadRequest,
    UploadResponse,
    decode_content,
    encode_content,
)

__all__ = [
    # Errors
    "EmptyInputException",
    "ErrorCodes",
    "FileNotFoundException",
    "InvalidFileNameException",
    "RootNotFoundException",
    "TransportException",
    "VaultError",
    "VaultException",
    # Transport
    "FileResponse",
    "ProofStepRecord",
    "UploadRequest",
    "UploadResponse",
    "decode_content",
    "encode_content",
]
