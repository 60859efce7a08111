"""Local directory used for uploaded files."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Annotated, BinaryIO

from fastapi import Depends

from src.config import settings
from src.services.errors import FileNotFoundInStorageError, InvalidUploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
PARTIAL_PREFIX = ".upload-"


class FileStorage:
    """Stores uploads flat inside a single directory."""

    def __init__(self, base_dir: str | Path, max_bytes: int | None = None) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes

    def _safe_name(self, filename: str | None) -> str:
        # Strip any directory part so uploads cannot escape base_dir
        name = Path(filename or "").name
        if name in {"", ".", ".."}:
            raise InvalidUploadError("A file name is required")
        return name

    def save(self, filename: str | None, source: BinaryIO) -> str:
        """Copy the stream into the upload directory and return the stored name."""

        name = self._safe_name(filename)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        target = self.base_dir / name

        # Readers only ever see the previous file or the complete new one
        written = 0
        with tempfile.NamedTemporaryFile(
            dir=self.base_dir, prefix=PARTIAL_PREFIX, delete=False
        ) as out:
            partial = Path(out.name)
            try:
                while chunk := source.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise InvalidUploadError(
                            f"File exceeds the maximum size of {self.max_bytes} bytes"
                        )
                    out.write(chunk)
            except BaseException:
                out.close()
                partial.unlink(missing_ok=True)
                raise

        os.replace(partial, target)

        logger.info("Stored upload %s", name, extra={"bytes": written})
        return name

    def path_for(self, filename: str) -> Path:
        name = self._safe_name(filename)
        path = self.base_dir / name
        if not path.is_file():
            raise FileNotFoundInStorageError(name)
        return path

    def list_files(self) -> list[str]:
        if not self.base_dir.exists():
            return []
        return sorted(
            p.name
            for p in self.base_dir.iterdir()
            if p.is_file() and not p.name.startswith(PARTIAL_PREFIX)
        )


_file_storage = FileStorage(settings.UPLOAD_DIR)


def get_file_storage() -> FileStorage:
    """FastAPI dependency factory."""

    return _file_storage


FileStorageDependency = Annotated[FileStorage, Depends(get_file_storage)]
