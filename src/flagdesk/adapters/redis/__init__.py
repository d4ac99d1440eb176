"""Redis adapter – requires ``flagdesk[redis]``."""
from flagdesk.adapters.redis.blob_store import RedisBlobStore

__all__ = ["RedisBlobStore"]
