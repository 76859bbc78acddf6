"""
Merkle Vault API (FastAPI)

HTTP API for the vault file server:
- POST /upload - Store a file
- GET /file/{filename} - Fetch a file with its Merkle proof
- GET /root - Current Merkle root
- GET /health - Health check

Usage:
    uvicorn api.app:create_app --factory
"""

__version__ = "0.1.0"
