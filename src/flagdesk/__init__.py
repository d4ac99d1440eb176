"""
flagdesk – local feature flag console core.

Import path convention::

    from flagdesk.application.store import FlagConsole
    from flagdesk.domain.models import FeatureDraft, State
    from flagdesk.adapters.blob_store import FileBlobStore
    from flagdesk.bootstrap import open_console
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
