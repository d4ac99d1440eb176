"""Bootstrap – wire settings, blob store, logging and the console together."""
from __future__ import annotations

from flagdesk.adapters.blob_store import BlobStore, FileBlobStore, InMemoryBlobStore
from flagdesk.application.store import FlagConsole
from flagdesk.config import ConsoleSettings, DotenvSettingsLoader, EnvSettingsLoader
from flagdesk.kernel.time import Clock
from flagdesk.kernel.types import IdFactory, new_id
from flagdesk.observability.logging import configure_logging


def load_settings(env_file: str | None = None) -> ConsoleSettings:
    """Read :class:`ConsoleSettings` from the environment, optionally via a ``.env`` file."""
    loader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
    return loader.load(ConsoleSettings)


def build_blob_store(settings: ConsoleSettings) -> BlobStore:
    match settings.storage_backend:
        case "memory":
            return InMemoryBlobStore()
        case "file":
            return FileBlobStore(settings.storage_dir)
        case "redis":
            from flagdesk.adapters.redis import RedisBlobStore

            return RedisBlobStore(settings.redis_url)
    raise ValueError(f"Unsupported storage backend {settings.storage_backend!r}")


def open_console(
    settings: ConsoleSettings | None = None,
    *,
    blob_store: BlobStore | None = None,
    clock: Clock | None = None,
    id_factory: IdFactory = new_id,
    configure_logs: bool = True,
) -> FlagConsole:
    """Return a ready :class:`FlagConsole` hydrated from the configured store."""
    settings = settings or load_settings()
    if configure_logs:
        configure_logging(settings.log_level, json_output=settings.log_json)
    return FlagConsole.open(
        blob_store or build_blob_store(settings),
        storage_key=settings.storage_key,
        clock=clock,
        id_factory=id_factory,
    )


__all__ = ["build_blob_store", "load_settings", "open_console"]
