"""Unit tests for the filesystem blob store."""

import io
import os
from unittest.mock import patch

import pytest

from src.catalog.core.exceptions import FileStoreError, StoredFileNotFoundError
from src.catalog.core.services.file_store import (
    FileStoreService,
    sanitize_filename,
    stored_filename,
)


class TestFilenames:
    def test_stored_filename_prefixes_code(self):
        assert stored_filename("abc123", "foto.png") == "abc123-foto.png"

    @pytest.mark.parametrize(
        "original,expected",
        [
            ("foto.png", "foto.png"),
            ("../../etc/passwd", "passwd"),
            ("C:\\fotos\\manzana.jpg", "manzana.jpg"),
            ("", "archivo"),
            (None, "archivo"),
            ("..", "archivo"),
        ],
    )
    def test_sanitize_filename(self, original, expected):
        assert sanitize_filename(original) == expected


class TestFileStoreService:
    def test_save_bytes(self, file_store):
        code = file_store.save_file("foto.png", b"\x89PNG data")

        stored = file_store.root / f"{code}-foto.png"
        assert stored.read_bytes() == b"\x89PNG data"
        assert file_store.load_file(f"{code}-foto.png") == b"\x89PNG data"

    def test_save_stream(self, file_store):
        code = file_store.save_file("datos.bin", io.BytesIO(b"x" * 3000))

        assert file_store.find(code).stat().st_size == 3000

    def test_codes_are_unique(self, file_store):
        codes = {file_store.save_file("mismo.txt", b"a") for _ in range(20)}

        assert len(codes) == 20
        assert len(list(file_store.root.glob("*-mismo.txt"))) == 20

    def test_no_temporary_files_left_behind(self, file_store):
        file_store.save_file("foto.png", b"data")

        assert [p.name for p in file_store.root.iterdir() if p.name.startswith(".")] == []

    def test_code_collision_retries(self, file_store):
        file_store.root.mkdir(parents=True)
        (file_store.root / "taken-foto.png").write_bytes(b"old")

        with patch.object(FileStoreService, "_new_code", side_effect=["taken", "free"]):
            code = file_store.save_file("foto.png", b"new")

        assert code == "free"
        # The existing blob is never overwritten
        assert (file_store.root / "taken-foto.png").read_bytes() == b"old"
        assert (file_store.root / "free-foto.png").read_bytes() == b"new"

    def test_write_failure_raises_file_store_error(self, file_store):
        with patch("src.catalog.core.services.file_store.os.link", side_effect=PermissionError("denied")):
            with pytest.raises(FileStoreError):
                file_store.save_file("foto.png", b"data")

        assert list(file_store.root.iterdir()) == []

    def test_file_store_error_is_an_os_error(self):
        assert issubclass(FileStoreError, OSError)
        assert issubclass(StoredFileNotFoundError, FileNotFoundError)

    def test_find_unknown_code(self, file_store):
        with pytest.raises(StoredFileNotFoundError):
            file_store.find("desconocido")

    @pytest.mark.parametrize("code", ["", "../x", ".upload", "a/b"])
    def test_find_rejects_path_like_codes(self, file_store, code):
        with pytest.raises(StoredFileNotFoundError):
            file_store.find(code)

    def test_find_treats_code_literally(self, file_store):
        file_store.save_file("foto.png", b"data")

        with pytest.raises(StoredFileNotFoundError):
            file_store.find("*")

    def test_delete_file(self, file_store):
        code = file_store.save_file("foto.png", b"data")

        assert file_store.delete_file(f"{code}-foto.png") is True
        assert file_store.delete_file(f"{code}-foto.png") is False
        with pytest.raises(StoredFileNotFoundError):
            file_store.find(code)

    def test_load_missing_file(self, file_store):
        with pytest.raises(StoredFileNotFoundError):
            file_store.load_file("nada-foto.png")

    def test_is_writable_creates_root(self, file_store):
        assert not file_store.root.exists()

        assert file_store.is_writable() is True
        assert file_store.root.is_dir()

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are ignored for root",
    )
    def test_is_writable_false_for_read_only_dir(self, tmp_path):
        read_only = tmp_path / "ro"
        read_only.mkdir()
        read_only.chmod(0o500)
        try:
            assert FileStoreService(read_only).is_writable() is False
        finally:
            read_only.chmod(0o700)


class TestContains:
    def test_stored_blob(self, file_store):
        code = file_store.save_file("foto.png", b"data")

        assert file_store.contains(f"{code}-foto.png") is True

    @pytest.mark.parametrize(
        "name",
        ["deadbeef-fake.png", "", "../foto.png", "sub/foto.png", ".upload-abc"],
    )
    def test_unknown_or_path_like_names(self, file_store, name):
        file_store.save_file("foto.png", b"data")

        assert file_store.contains(name) is False
