"""Application – the console's command/query surface."""
from flagdesk.application.search import search_features
from flagdesk.application.store import FlagConsole

__all__ = ["FlagConsole", "search_features"]
