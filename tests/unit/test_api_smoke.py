"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /upload stores files
3. GET /file/{filename} returns content plus a proof that verifies
4. Missing file, single-file store, bad names and bad content map to errors
5. GET /root reports the current root
"""

import base64

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.config import RuntimeConfig
from core.crypto.hashing import from_hex, to_hex
from core.merkle import MerkleTree, proof_from_records, verify_merkle_proof
from core.schemas.errors import ErrorCodes
from core.schemas.transport import FileResponse


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def client(server_dir):
    app = create_app(store_dir=server_dir, config=RuntimeConfig())
    return TestClient(app)


@pytest.fixture
def loaded_client(client, eight_files):
    for name, content in eight_files.items():
        response = client.post("/upload", json={"filename": name, "content": b64(content)})
        assert response.status_code == 200
    return client


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["service"] == "merkle-vault-api"

    def test_root_path(self, client):
        assert client.get("/").json()["ok"] is True


class TestUpload:

    def test_upload_stores_file(self, client, server_dir):
        response = client.post("/upload", json={"filename": "a.txt", "content": b64(b"hello")})
        assert response.status_code == 200
        assert response.json() == {"message": "File uploaded successfully"}
        assert (server_dir / "a.txt").read_bytes() == b"hello"

    def test_upload_binary_content(self, client, server_dir):
        payload = bytes(range(256))
        client.post("/upload", json={"filename": "blob", "content": b64(payload)})
        assert (server_dir / "blob").read_bytes() == payload

    def test_upload_replaces(self, client, server_dir):
        client.post("/upload", json={"filename": "a", "content": b64(b"one")})
        client.post("/upload", json={"filename": "a", "content": b64(b"two")})
        assert (server_dir / "a").read_bytes() == b"two"

    def test_upload_invalid_base64(self, client):
        response = client.post("/upload", json={"filename": "a", "content": "not base64!"})
        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == ErrorCodes.INVALID_CONTENT

    @pytest.mark.parametrize("name", ["../escape", ".hidden", "dir\\file"])
    def test_upload_invalid_filename(self, client, server_dir, name):
        response = client.post("/upload", json={"filename": name, "content": b64(b"x")})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == ErrorCodes.INVALID_FILENAME
        assert list(server_dir.iterdir()) == []

    def test_upload_missing_field(self, client):
        response = client.post("/upload", json={"filename": "a"})
        assert response.status_code == 422


class TestDownload:

    def test_file_with_proof_verifies(self, loaded_client, eight_files):
        root = MerkleTree.build(eight_files).root_hash
        for name, content in eight_files.items():
            response = loaded_client.get(f"/file/{name}")
            assert response.status_code == 200

            body = FileResponse.model_validate(response.json())
            assert body.filename == name
            assert body.content_bytes() == content
            assert verify_merkle_proof(proof_from_records(body.merkle_proof), root, content)

    def test_proof_wire_shape(self, loaded_client):
        steps = loaded_client.get("/file/file1").json()["merkle_proof"]
        assert len(steps) == 4
        for step in steps:
            assert set(step) == {"digest", "side"}
            assert step["digest"].startswith("0x")
            assert step["side"] in ("Left", "Right")

    def test_missing_file_404(self, loaded_client):
        response = loaded_client.get("/file/nope")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == ErrorCodes.FILE_NOT_FOUND

    def test_hidden_name_rejected(self, loaded_client):
        response = loaded_client.get("/file/.secret")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == ErrorCodes.INVALID_FILENAME

    def test_single_file_store_409(self, client):
        client.post("/upload", json={"filename": "only", "content": b64(b"x")})
        response = client.get("/file/only")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == ErrorCodes.PROOF_UNAVAILABLE

    def test_proof_tracks_current_store(self, loaded_client, eight_files):
        """Adding a file changes the tree the next proof is built from."""
        old_root = MerkleTree.build(eight_files).root_hash
        loaded_client.post("/upload", json={"filename": "file9", "content": b64(b"File 9 contents")})

        body = FileResponse.model_validate(loaded_client.get("/file/file1").json())
        proof = proof_from_records(body.merkle_proof)

        assert not verify_merkle_proof(proof, old_root, eight_files["file1"])


class TestRoot:

    def test_root_matches_local_tree(self, loaded_client, eight_files):
        response = loaded_client.get("/root")
        assert response.status_code == 200
        body = response.json()
        assert body["root"] == to_hex(MerkleTree.build(eight_files).root_hash)
        assert body["file_count"] == 8
        assert len(from_hex(body["root"])) == 32

    def test_root_empty_store(self, client):
        response = client.get("/root")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == ErrorCodes.EMPTY_INPUT
