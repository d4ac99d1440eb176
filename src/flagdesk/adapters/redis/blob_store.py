"""Redis adapter – RedisBlobStore."""
from __future__ import annotations

from typing import Any

from flagdesk.adapters.blob_store import BlobStore
from flagdesk.kernel.errors import BlobStoreError


def _require_redis() -> Any:
    try:
        import redis
        return redis
    except ImportError as exc:
        raise ImportError("Install 'flagdesk[redis]' to use the Redis blob store") from exc


class RedisBlobStore(BlobStore):
    """Keeps the State blob in a Redis string key."""

    def __init__(self, url: str | None = None, *, client: Any = None, **kwargs: Any) -> None:
        if client is None:
            if not url:
                raise ValueError("RedisBlobStore needs either a url or a client")
            client = _require_redis().Redis.from_url(url, decode_responses=True, **kwargs)
        self._client = client

    def read(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except Exception as exc:
            raise BlobStoreError(key, "read", cause=exc) from exc
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value

    def write(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except Exception as exc:
            raise BlobStoreError(key, "write", cause=exc) from exc

    def close(self) -> None:
        self._client.close()


__all__ = ["RedisBlobStore"]
