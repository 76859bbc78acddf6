"""
File Storage Unit Tests
Tests for core/storage/file_store.py
"""
import pytest

from core.crypto.hashing import sha256
from core.schemas.errors import (
    ErrorCodes,
    FileNotFoundException,
    InvalidFileNameException,
    RootNotFoundException,
    VaultException,
)
from core.storage import FileStore, RootStore, validate_filename


class TestValidateFilename:

    @pytest.mark.parametrize("name", ["file1", "report.txt", "a b c", "UPPER.bin"])
    def test_plain_names_accepted(self, name):
        assert validate_filename(name) == name

    @pytest.mark.parametrize("name", ["", ".", "..", ".hidden", "../escape", "dir/file", "dir\\file", "nul\x00byte"])
    def test_path_like_names_rejected(self, name):
        with pytest.raises(InvalidFileNameException) as exc_info:
            validate_filename(name)
        assert exc_info.value.code == ErrorCodes.INVALID_FILENAME


class TestFileStore:

    def test_snapshot_sorted_and_complete(self, client_dir, eight_files):
        snapshot = FileStore(client_dir).snapshot()
        assert snapshot == eight_files
        assert list(snapshot) == sorted(eight_files)

    def test_snapshot_skips_hidden_and_directories(self, tmp_path):
        (tmp_path / "a").write_bytes(b"a")
        (tmp_path / ".tmp").write_bytes(b"partial")
        (tmp_path / "sub").mkdir()
        assert FileStore(tmp_path).snapshot() == {"a": b"a"}

    def test_missing_directory_is_empty(self, tmp_path):
        store = FileStore(tmp_path / "nowhere")
        assert store.snapshot() == {}
        assert store.list_names() == []

    def test_save_and_read(self, tmp_path):
        store = FileStore(tmp_path / "store")
        path = store.save("a.txt", b"hello")
        assert path == tmp_path / "store" / "a.txt"
        assert store.read("a.txt") == b"hello"
        assert store.exists("a.txt")

    def test_save_overwrites(self, tmp_path):
        store = FileStore(tmp_path)
        store.save("a", b"one")
        store.save("a", b"two")
        assert store.read("a") == b"two"
        assert store.list_names() == ["a"]

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = FileStore(tmp_path)
        store.save("a", b"x")
        assert [p.name for p in tmp_path.iterdir()] == ["a"]

    def test_read_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundException) as exc_info:
            FileStore(tmp_path).read("missing")
        assert exc_info.value.details["filename"] == "missing"

    def test_save_rejects_escape(self, tmp_path):
        with pytest.raises(InvalidFileNameException):
            FileStore(tmp_path / "store").save("../outside", b"x")
        assert not (tmp_path / "outside").exists()

    def test_delete(self, client_dir):
        store = FileStore(client_dir)
        store.delete("file1")
        assert not store.exists("file1")
        with pytest.raises(FileNotFoundException):
            store.delete("file1")


class TestRootStore:

    def test_save_and_load(self, tmp_path):
        roots = RootStore(tmp_path / "merkle.bin")
        root = sha256(b"root")
        roots.save(root)
        assert roots.exists()
        assert roots.load() == root
        assert (tmp_path / "merkle.bin").read_bytes() == root

    def test_creates_parent_directory(self, tmp_path):
        roots = RootStore(tmp_path / "nested" / "merkle.bin")
        roots.save(sha256(b"x"))
        assert roots.load() == sha256(b"x")

    def test_load_missing_raises(self, tmp_path):
        with pytest.raises(RootNotFoundException) as exc_info:
            RootStore(tmp_path / "merkle.bin").load()
        assert exc_info.value.code == ErrorCodes.ROOT_NOT_FOUND

    def test_rejects_wrong_length(self, tmp_path):
        with pytest.raises(VaultException, match="32"):
            RootStore(tmp_path / "merkle.bin").save(b"short")
