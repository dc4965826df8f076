"""File-backed storage: one JSON snapshot file per collection."""

import asyncio
from collections.abc import Mapping
import contextlib
import os
from pathlib import Path
import tempfile
from typing import Any

import structlog

from . import codec
from .base import COLLECTIONS, check_collection

logger = structlog.get_logger(__name__)


class FileStorageAdapter:
    """Durable adapter writing ``<data_dir>/<collection>.json``.

    Writes are crash-atomic: the snapshot goes to a temporary file in the same
    directory, is fsynced, then renamed over the destination. A reader never
    sees a truncated file.

    Not safe for several hosts sharing one directory.
    """

    def __init__(self, data_dir: str | Path = ".data"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for name in COLLECTIONS:
            path = self.path_for(name)
            if not path.exists():
                self._write(path, "{}")

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{check_collection(name)}.json"

    async def load_collection(self, name: str) -> dict[str, dict[str, Any]]:
        return await asyncio.to_thread(self._read, self.path_for(name))

    async def save_collection(self, name: str, records: Mapping[str, Mapping[str, Any]]) -> None:
        path = self.path_for(name)
        text = codec.dumps(dict(records))
        await asyncio.to_thread(self._write, path, text)
        logger.debug("collection_saved", collection=name, records=len(records), path=str(path))

    async def close(self) -> None:
        pass

    def _read(self, path: Path) -> dict[str, dict[str, Any]]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            return codec.loads(text)
        except ValueError as e:
            logger.error("collection_file_corrupt", path=str(path), error=str(e))
            return {}

    def _write(self, path: Path, text: str) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_path)
            raise
