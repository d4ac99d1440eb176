"""Adapters – concrete blob stores behind the :class:`BlobStore` port."""
from flagdesk.adapters.blob_store import BlobStore, FileBlobStore, InMemoryBlobStore

__all__ = ["BlobStore", "FileBlobStore", "InMemoryBlobStore"]
