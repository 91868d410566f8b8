# catalog_sdk/results.py
import enum
from dataclasses import dataclass
from typing import Optional

from catalog_service.models import CatalogEnvelope


class FetchErrorKind(enum.Enum):
    NETWORK = "network error"
    PROTOCOL = "HTTP error"
    FORMAT = "data format error"
    UNEXPECTED = "unexpected error"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one catalog fetch: an envelope, or an error kind plus detail."""

    envelope: Optional[CatalogEnvelope] = None
    error: Optional[FetchErrorKind] = None
    detail: str = ""

    def __post_init__(self):
        if (self.envelope is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of envelope or error")

    @classmethod
    def ok(cls, envelope: CatalogEnvelope) -> "FetchResult":
        return cls(envelope=envelope)

    @classmethod
    def failed(cls, kind: FetchErrorKind, detail: str) -> "FetchResult":
        return cls(error=kind, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        return f"{self.error.value}: {self.detail}"
