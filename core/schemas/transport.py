"""
Schemas
File: transport.py

Purpose: Wire models exchanged between the vault client and server.
Digests travel as 0x-prefixed hex strings, file contents as base64.
"""

import base64
import binascii
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import DIGEST_SIZE, from_hex


class ProofStepRecord(BaseModel):
    """
    Serialized form of one audit path step.

    The position of a record inside its list is significant and must be
    preserved across serialization.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: str = Field(
        ...,
        description="0x-prefixed hex digest",
        examples=["0x" + "ab" * DIGEST_SIZE],
    )
    side: Literal["Left", "Right"] | None = Field(
        default=None,
        description="Operand position during recombination (null for a reduced value)",
    )

    @field_validator("digest")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        raw = from_hex(v)
        if len(raw) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
        return v.lower()


def encode_content(content: bytes) -> str:
    """Encode raw file bytes for transport."""
    return base64.b64encode(content).decode("ascii")


def decode_content(encoded: str) -> bytes:
    """
    Decode transported file bytes.

    Raises:
        ValueError: If ``encoded`` is not valid base64
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 content: {e}") from e


class UploadRequest(BaseModel):
    """Request body for POST /upload."""

    model_config = ConfigDict(extra="forbid")

    filename: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name the file is stored under",
    )
    content: str = Field(
        ...,
        description="Base64-encoded file contents",
    )

    @classmethod
    def from_bytes(cls, filename: str, content: bytes) -> "UploadRequest":
        return cls(filename=filename, content=encode_content(content))

    def content_bytes(self) -> bytes:
        return decode_content(self.content)


class UploadResponse(BaseModel):
    """Response for POST /upload."""

    message: str = Field(..., description="Human-readable outcome")


class FileResponse(BaseModel):
    """Response for GET /file/{filename}: contents plus a fresh proof."""

    filename: str = Field(..., description="Requested file name")
    content: str = Field(..., description="Base64-encoded file contents")
    merkle_proof: list[ProofStepRecord] = Field(
        ...,
        min_length=1,
        description="Audit path against the server's current tree, replayed from the tail",
    )

    def content_bytes(self) -> bytes:
        return decode_content(self.content)


__all__ = [
    "ProofStepRecord",
    "UploadRequest",
    "UploadResponse",
    "FileResponse",
    "encode_content",
    "decode_content",
]
