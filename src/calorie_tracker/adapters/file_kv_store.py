"""Key-value store keeping one file per key on the local filesystem."""

import asyncio
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.services.storage import KeyValueStore

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each value in ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory that is then renamed
    over the target, so readers never observe a half-written value.
    """

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "FileKeyValueStore":
        """Create a store rooted at ``directory``."""
        return cls(directory=Path(directory).expanduser())

    async def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if any."""
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: str) -> None:
        """Atomically replace the stored value for a key."""
        await asyncio.to_thread(self._write, key, value)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
