"""
File Routes

Upload files into the server's store and download a file together with
a Merkle proof against the store's current contents.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_file_store
from api.errors import (
    EmptyStoreError,
    InternalError,
    InvalidContentError,
    InvalidRequestError,
    ProofUnavailableError,
    StoredFileNotFoundError,
)
from api.models.responses import RootResponse
from core.crypto.hashing import short_hex, to_hex
from core.merkle import MerkleTree, proof_to_records
from core.schemas.errors import EmptyInputException, ErrorCodes, InvalidFileNameException
from core.schemas.transport import FileResponse, UploadRequest, UploadResponse, encode_content
from core.storage import FileStore, validate_filename


logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


def _checked_name(filename: str) -> str:
    try:
        return validate_filename(filename)
    except InvalidFileNameException as e:
        raise InvalidRequestError(e.message, code=ErrorCodes.INVALID_FILENAME, details=e.details)


@router.post("/upload", response_model=UploadResponse)
def upload(
    body: UploadRequest,
    store: FileStore = Depends(get_file_store),
) -> UploadResponse:
    """
    Store an uploaded file.

    The body carries the file name and its base64-encoded contents.
    An existing file with the same name is replaced.
    """
    filename = _checked_name(body.filename)

    try:
        content = body.content_bytes()
    except ValueError as e:
        raise InvalidContentError(str(e))

    try:
        store.save(filename, content)
    except OSError as e:
        logger.exception(f"Failed to save {filename}")
        raise InternalError(f"Failed to save file: {e}")

    return UploadResponse(message="File uploaded successfully")


@router.get("/file/{filename}", response_model=FileResponse)
def request_file(
    filename: str,
    store: FileStore = Depends(get_file_store),
) -> FileResponse:
    """
    Return a stored file and its Merkle proof.

    The tree is rebuilt from a fresh snapshot of the store for every
    request, and the returned contents come from that same snapshot.
    """
    filename = _checked_name(filename)

    try:
        files = store.snapshot()
    except OSError as e:
        logger.exception(f"Failed to read store {store.directory}")
        raise InternalError(f"Failed to read stored files: {e}")

    if filename not in files:
        raise StoredFileNotFoundError(filename)

    tree = MerkleTree.build(files)
    proof = tree.generate_merkle_proof(filename, files)
    if proof is None:
        logger.warning(f"Failed to generate merkle proof for {store.directory}/{filename}")
        raise ProofUnavailableError(
            filename,
            reason=f"the store holds {tree.leaf_count} file(s)",
        )

    logger.info(
        f"Serving {filename} with {len(proof)}-step proof against root {short_hex(tree.root_hash)}"
    )
    return FileResponse(
        filename=filename,
        content=encode_content(files[filename]),
        merkle_proof=proof_to_records(proof),
    )


@router.get("/root", response_model=RootResponse)
def current_root(store: FileStore = Depends(get_file_store)) -> RootResponse:
    """Merkle root of the store's current contents."""
    files = store.snapshot()
    try:
        tree = MerkleTree.build(files)
    except EmptyInputException:
        raise EmptyStoreError()
    return RootResponse(root=to_hex(tree.root_hash), file_count=tree.leaf_count)
