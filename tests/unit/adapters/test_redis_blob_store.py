"""Unit tests for RedisBlobStore – no running Redis required."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import flagdesk.adapters.redis.blob_store as redis_mod
from flagdesk.adapters.redis import RedisBlobStore
from flagdesk.kernel.errors import BlobStoreError

KEY = "pm-ffm:static:v2"


def _make_store() -> tuple[RedisBlobStore, MagicMock]:
    client = MagicMock()
    client.get = MagicMock(return_value=None)
    return RedisBlobStore(client=client), client


class TestRedisBlobStore:
    def test_builds_client_from_url(self) -> None:
        mock_redis = MagicMock()
        with patch.object(redis_mod, "_require_redis", return_value=mock_redis):
            RedisBlobStore("redis://localhost:6379/0")
        mock_redis.Redis.from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=True
        )

    def test_needs_url_or_client(self) -> None:
        with pytest.raises(ValueError):
            RedisBlobStore()

    def test_read_miss(self) -> None:
        store, client = _make_store()
        assert store.read(KEY) is None
        client.get.assert_called_once_with(KEY)

    def test_read_decodes_bytes(self) -> None:
        store, client = _make_store()
        client.get.return_value = b'{"features": []}'
        assert store.read(KEY) == '{"features": []}'

    def test_write_sets_key(self) -> None:
        store, client = _make_store()
        store.write(KEY, "{}")
        client.set.assert_called_once_with(KEY, "{}")

    def test_read_error_is_wrapped(self) -> None:
        store, client = _make_store()
        client.get.side_effect = ConnectionError("down")
        with pytest.raises(BlobStoreError) as exc_info:
            store.read(KEY)
        assert exc_info.value.operation == "read"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_write_error_is_wrapped(self) -> None:
        store, client = _make_store()
        client.set.side_effect = ConnectionError("down")
        with pytest.raises(BlobStoreError) as exc_info:
            store.write(KEY, "{}")
        assert exc_info.value.operation == "write"

    def test_close(self) -> None:
        store, client = _make_store()
        store.close()
        client.close.assert_called_once()
