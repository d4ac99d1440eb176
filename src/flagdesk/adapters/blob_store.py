"""Adapters – BlobStore port, in-memory and file-backed implementations."""
from __future__ import annotations

import abc
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from flagdesk.kernel.errors import BlobStoreError


class BlobStore(abc.ABC):
    """Port: durable key → text storage.

    The console reads one key at start-up and rewrites it after every
    mutating command. Implementations raise
    :class:`~flagdesk.kernel.errors.BlobStoreError` on I/O failure.
    """

    @abc.abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored text, or ``None`` when *key* was never written."""

    @abc.abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the text stored under *key*."""


class InMemoryBlobStore(BlobStore):
    """Dict-backed store for unit tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self._blobs.get(key)

    def write(self, key: str, value: str) -> None:
        self._blobs[key] = value
        self.writes += 1


class FileBlobStore(BlobStore):
    """One UTF-8 file per key under *directory*.

    Writes go to a temporary file that is then renamed over the target, so a
    crash mid-write leaves the previous blob intact.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{quote(key, safe='')}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise BlobStoreError(key, "read", cause=exc) from exc

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, UnicodeEncodeError) as exc:
            raise BlobStoreError(key, "write", cause=exc) from exc


__all__ = ["BlobStore", "FileBlobStore", "InMemoryBlobStore"]
