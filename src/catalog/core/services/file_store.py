"""Filesystem blob store for uploaded product images."""

from __future__ import annotations

import glob
import os
import secrets
import tempfile
from pathlib import Path
from typing import BinaryIO

from loguru import logger

from src.catalog.core.exceptions import FileStoreError, StoredFileNotFoundError

_CHUNK_SIZE = 1024 * 1024
_CODE_BYTES = 8
_MAX_CODE_ATTEMPTS = 10


def sanitize_filename(original_name: str | None) -> str:
    """Strip directory components from a client supplied filename."""
    name = Path((original_name or "").replace("\\", "/")).name.strip()
    if name in ("", ".", ".."):
        return "archivo"
    return name


def stored_filename(file_code: str, original_name: str | None) -> str:
    """Name under which a blob is kept: ``{fileCode}-{originalName}``."""
    return f"{file_code}-{sanitize_filename(original_name)}"


class FileStoreService:
    """Content sink that keeps uploaded bytes under ``{fileCode}-{originalName}``.

    File codes are random and generated here; a blob is never overwritten.
    Bytes are first written to a temporary file in the same directory and
    then hard-linked into place, so a returned code always refers to a
    complete file.
    """

    def __init__(self, root_dir: str | Path):
        self._root = Path(root_dir)

    @property
    def root(self) -> Path:
        return self._root

    def _ensure_root(self) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileStoreError(f"Cannot create file store directory {self._root}: {e}") from e

    @staticmethod
    def _new_code() -> str:
        return secrets.token_hex(_CODE_BYTES)

    def save_file(self, original_name: str | None, data: bytes | BinaryIO) -> str:
        """Persist ``data`` and return the generated file code."""
        self._ensure_root()
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self._root, prefix=".upload-", delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                if isinstance(data, (bytes, bytearray, memoryview)):
                    tmp.write(data)
                else:
                    while chunk := data.read(_CHUNK_SIZE):
                        tmp.write(chunk)
                tmp.flush()
                os.fsync(tmp.fileno())

            for _ in range(_MAX_CODE_ATTEMPTS):
                file_code = self._new_code()
                target = self._root / stored_filename(file_code, original_name)
                try:
                    os.link(tmp_path, target)
                except FileExistsError:
                    logger.warning("File code collision for {}, retrying", target.name)
                    continue
                logger.info("Stored file {}", target.name)
                return file_code

            raise FileStoreError(
                f"Could not allocate a unique file code after {_MAX_CODE_ATTEMPTS} attempts"
            )
        except FileStoreError:
            raise
        except OSError as e:
            logger.error("Failed to store file {}: {}", original_name, e)
            raise FileStoreError(f"Could not store file {original_name!r}: {e}") from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

    def find(self, file_code: str) -> Path:
        """Return the path of the blob stored under ``file_code``."""
        if not file_code or "/" in file_code or "\\" in file_code or file_code.startswith("."):
            raise StoredFileNotFoundError(f"No file found for code {file_code!r}")
        matches = sorted(self._root.glob(f"{glob.escape(file_code)}-*")) if self._root.is_dir() else []
        if not matches:
            raise StoredFileNotFoundError(f"No file found for code {file_code!r}")
        return matches[0]

    def contains(self, name: str) -> bool:
        """Whether ``name`` is the stored name of a blob in this store."""
        if not name or name.startswith(".") or sanitize_filename(name) != name:
            return False
        return (self._root / name).is_file()

    def load_file(self, name: str) -> bytes:
        """Read back a blob by its stored name ``{fileCode}-{originalName}``."""
        path = self._root / sanitize_filename(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise StoredFileNotFoundError(f"No file stored as {name!r}") from e
        except OSError as e:
            raise FileStoreError(f"Could not read file {name!r}: {e}") from e

    def delete_file(self, name: str) -> bool:
        """Remove a blob by its stored name; return whether it existed."""
        path = self._root / sanitize_filename(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FileStoreError(f"Could not delete file {name!r}: {e}") from e
        logger.info("Deleted stored file {}", path.name)
        return True

    def is_writable(self) -> bool:
        """Whether the store directory exists (or can be created) and accepts writes."""
        try:
            self._ensure_root()
        except FileStoreError:
            return False
        return os.access(self._root, os.W_OK)
