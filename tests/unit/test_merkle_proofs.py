"""
Merkle Proof Unit Tests
Tests for core/merkle/merkle_proofs.py

1. Every file of every snapshot size proves and verifies
2. Tampered content, proof, or root fails verification
3. Malformed proofs return False instead of raising
4. Wire records preserve order and sides
"""
import pytest
from pydantic import ValidationError

from core.crypto.hashing import sha256, to_hex
from core.merkle import (
    MerkleProver,
    MerkleTree,
    MerkleVerifier,
    NodeSide,
    ProofStep,
    proof_from_records,
    proof_to_records,
    verify_merkle_proof,
)
from core.schemas.transport import ProofStepRecord


def files_of(count: int) -> dict[str, bytes]:
    return {f"file{i}": f"File {i} contents".encode() for i in range(1, count + 1)}


class TestRoundTrip:

    @pytest.mark.parametrize("count", [2, 3, 4, 5, 7, 8, 11, 16])
    def test_every_file_verifies(self, count):
        files = files_of(count)
        tree = MerkleTree.build(files)
        for name, content in files.items():
            proof = tree.generate_merkle_proof(name, files)
            assert proof is not None, name
            assert verify_merkle_proof(proof, tree.root_hash, content), name

    def test_duplicate_contents_verify(self):
        files = {"a": b"same", "b": b"same", "c": b"other"}
        tree = MerkleTree.build(files)
        for name, content in files.items():
            proof = tree.generate_merkle_proof(name, files)
            assert verify_merkle_proof(proof, tree.root_hash, content)

    def test_prover_and_verifier(self, eight_files):
        root = MerkleProver.compute_root(eight_files)
        proof = MerkleProver.prove(eight_files, "file7")
        assert MerkleVerifier.verify(proof, root, eight_files["file7"])


class TestTamperDetection:

    def test_wrong_content_rejected(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        assert not verify_merkle_proof(proof, tree.root_hash, b"File 1 contents, edited")

    def test_other_files_content_does_not_pass(self, eight_files):
        """Content of a different file appears nowhere in this proof's leaf pair."""
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        assert not verify_merkle_proof(proof, tree.root_hash, eight_files["file5"])

    def test_wrong_root_rejected(self, eight_files):
        tree = MerkleTree.build(eight_files)
        other_root = MerkleTree.build(files_of(4)).root_hash
        proof = tree.generate_merkle_proof("file2", eight_files)
        assert not verify_merkle_proof(proof, other_root, eight_files["file2"])

    def test_server_side_tamper_rejected(self, eight_files):
        """A proof from a tampered store does not match the original root."""
        original_root = MerkleTree.build(eight_files).root_hash
        tampered = dict(eight_files)
        tampered["file3"] = b"evil"
        tree = MerkleTree.build(tampered)
        proof = tree.generate_merkle_proof("file3", tampered)

        assert verify_merkle_proof(proof, tree.root_hash, b"evil")
        assert not verify_merkle_proof(proof, original_root, b"evil")

    def test_flipped_side_rejected(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        flipped = [ProofStep(proof[0].digest, proof[0].side.opposite)] + proof[1:]
        assert not verify_merkle_proof(flipped, tree.root_hash, eight_files["file1"])

    def test_tampered_sibling_rejected(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        proof[1] = ProofStep(sha256(b"forged"), proof[1].side)
        assert not verify_merkle_proof(proof, tree.root_hash, eight_files["file1"])


class TestMalformedProofs:

    def test_empty_proof(self, eight_files):
        root = MerkleTree.build(eight_files).root_hash
        assert verify_merkle_proof([], root, eight_files["file1"]) is False

    def test_single_step_proof(self):
        content = b"only"
        step = ProofStep(sha256(content), NodeSide.LEFT)
        assert verify_merkle_proof([step], sha256(content), content) is False

    def test_missing_content_digest(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        without_leaf = [step for step in proof if step.digest != sha256(eight_files["file1"])]
        assert verify_merkle_proof(without_leaf, tree.root_hash, eight_files["file1"]) is False

    def test_step_without_side(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        proof[2] = ProofStep(proof[2].digest, None)
        assert verify_merkle_proof(proof, tree.root_hash, eight_files["file1"]) is False

    def test_caller_list_not_mutated(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file4", eight_files)
        snapshot = list(proof)
        verify_merkle_proof(proof, tree.root_hash, eight_files["file4"])
        assert proof == snapshot

    def test_verify_file_missing_path(self, tmp_path, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        assert MerkleVerifier.verify_file(tmp_path / "missing", proof, tree.root_hash) is False

    def test_verify_file_on_disk(self, tmp_path, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file1", eight_files)
        path = tmp_path / "file1"
        path.write_bytes(eight_files["file1"])
        assert MerkleVerifier.verify_file(path, proof, tree.root_hash) is True


class TestWireRecords:

    def test_records_preserve_order_and_sides(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file6", eight_files)
        records = proof_to_records(proof)

        assert [r.digest for r in records] == [to_hex(s.digest) for s in proof]
        assert [r.side for r in records] == [s.side.value for s in proof]
        assert proof_from_records(records) == proof

    def test_records_verify(self, eight_files):
        tree = MerkleTree.build(eight_files)
        proof = tree.generate_merkle_proof("file2", eight_files)
        records = [ProofStepRecord.model_validate(r.model_dump()) for r in proof_to_records(proof)]
        assert MerkleVerifier.verify_records(records, tree.root_hash, eight_files["file2"])

    def test_record_json_shape(self):
        record = ProofStepRecord(digest=to_hex(sha256(b"x")), side="Left")
        assert record.model_dump() == {"digest": to_hex(sha256(b"x")), "side": "Left"}

    def test_record_digest_normalised_to_lowercase(self):
        upper = "0x" + sha256(b"x").hex().upper()
        assert ProofStepRecord(digest=upper).digest == upper.lower()

    @pytest.mark.parametrize("digest", ["abcd", "0x1234", "0x" + "zz" * 32])
    def test_record_rejects_bad_digest(self, digest):
        with pytest.raises(ValidationError):
            ProofStepRecord(digest=digest)

    def test_record_rejects_unknown_side(self):
        with pytest.raises(ValidationError):
            ProofStepRecord(digest=to_hex(sha256(b"x")), side="Up")


class TestEightFileScenario:
    """file1.txt..file8.txt holding "File {i} contents"."""

    @pytest.fixture
    def txt_files(self):
        return {f"file{i}.txt": f"File {i} contents".encode() for i in range(1, 9)}

    def test_proof_for_file1_verifies(self, txt_files):
        tree = MerkleTree.build(txt_files)
        proof = tree.generate_merkle_proof("file1.txt", txt_files)
        assert verify_merkle_proof(proof, tree.root_hash, txt_files["file1.txt"])

    def test_modified_tree_rejects_original_proof(self, txt_files):
        tree = MerkleTree.build(txt_files)
        proof = tree.generate_merkle_proof("file1.txt", txt_files)

        modified = {name: b"Modified " + content for name, content in txt_files.items()}
        modified_root = MerkleTree.build(modified).root_hash

        assert not verify_merkle_proof(proof, modified_root, txt_files["file1.txt"])
        assert not verify_merkle_proof(proof, modified_root, modified["file1.txt"])

    def test_locator(self, txt_files):
        tree = MerkleTree.build(txt_files)
        h8 = sha256(txt_files["file8.txt"])
        h3 = sha256(txt_files["file3.txt"])

        assert tree.find_target_relative_to_node(tree.root, h8) is NodeSide.LEFT
        assert tree.find_target_relative_to_node(tree.root, h3) is NodeSide.RIGHT
        assert tree.find_target_relative_to_node(tree.root.right, h8) is None
