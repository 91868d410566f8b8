# catalog_sdk/view.py
"""Catalog view state machine.

The view moves between Loading, Loaded and Failed as it fetches the
catalog. A successfully fetched envelope is kept for a short freshness
window so repeated activations do not hit the network. Observers are
notified exactly twice per real fetch: once on entering Loading and
once when the outcome is known.
"""
import enum
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Protocol

from catalog_service.models import CatalogEnvelope

from .results import FetchErrorKind, FetchResult

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW = timedelta(minutes=2)


class ViewStatus(enum.Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus
    envelope: Optional[CatalogEnvelope] = None
    message: str = ""


LOADING = ViewState(ViewStatus.LOADING)


class CatalogSource(Protocol):
    def fetch_catalog(self) -> FetchResult: ...


Listener = Callable[[ViewState], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CatalogView:
    def __init__(
        self,
        source: CatalogSource,
        freshness_window: timedelta = FRESHNESS_WINDOW,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.source = source
        self.freshness_window = freshness_window
        self._clock = clock
        self._listeners: List[Listener] = []
        # one fetch at a time; later callers wait and re-check freshness
        self._fetch_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self.last_envelope: Optional[CatalogEnvelope] = None
        self.last_fetch_instant: Optional[datetime] = None
        self.state: ViewState = LOADING

    # ---------------------------
    # Observers
    # ---------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("view listener failed on %s", state.status.value)

    # ---------------------------
    # Operations
    # ---------------------------
    def is_fresh(self) -> bool:
        with self._state_lock:
            if self.last_envelope is None or self.last_fetch_instant is None:
                return False
            return self._clock() - self.last_fetch_instant < self.freshness_window

    def ensure_fresh(self) -> bool:
        """Fetch the catalog unless the cached envelope is still fresh.

        Returns True when a network fetch was made.
        """
        with self._fetch_lock:
            if self.is_fresh():
                logger.debug("catalog still fresh, skipping fetch")
                return False
            self._fetch()
            return True

    def retry(self) -> bool:
        with self._fetch_lock:
            with self._state_lock:
                self.last_envelope = None
                self.last_fetch_instant = None
            self._fetch()
            return True

    def _fetch(self) -> None:
        self.state = LOADING
        self._notify()

        try:
            result = self.source.fetch_catalog()
        except Exception as e:
            logger.exception("catalog source raised")
            result = FetchResult.failed(FetchErrorKind.UNEXPECTED, str(e))

        with self._state_lock:
            if result.is_ok:
                self.last_envelope, self.last_fetch_instant = result.envelope, self._clock()
                self.state = ViewState(ViewStatus.LOADED, envelope=result.envelope)
            else:
                self.state = ViewState(ViewStatus.FAILED, message=result.message)
        self._notify()
