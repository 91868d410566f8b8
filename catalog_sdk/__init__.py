"""Client side of the catalog demo: HTTP client, view state machine, rendering."""
from .client import CatalogClient
from .results import FetchErrorKind, FetchResult
from .view import CatalogView, ViewState, ViewStatus

__all__ = [
    "CatalogClient",
    "CatalogView",
    "FetchErrorKind",
    "FetchResult",
    "ViewState",
    "ViewStatus",
]
