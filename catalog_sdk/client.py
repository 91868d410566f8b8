# catalog_sdk/client.py
import logging
from typing import Optional

import httpx
import requests

from catalog_service.config import HEALTH_PATH, PRODUCT_LIST_PATH
from catalog_service.models import decode_envelope

from .config import DEFAULT_BASE_URL
from .results import FetchErrorKind, FetchResult

logger = logging.getLogger(__name__)


def _decode(body: bytes) -> FetchResult:
    try:
        envelope = decode_envelope(body)
    except ValueError as e:
        logger.warning("catalog response did not parse: %s", e)
        return FetchResult.failed(FetchErrorKind.FORMAT, str(e))
    logger.debug("fetched %d products", envelope.total_count)
    return FetchResult.ok(envelope)


def _protocol_error(status_code: int, reason: str) -> FetchResult:
    logger.warning("catalog request failed with HTTP %s %s", status_code, reason)
    return FetchResult.failed(FetchErrorKind.PROTOCOL, f"{status_code} {reason}".strip())


class CatalogClient:
    """Talks to the Catalog Service.

    ``fetch_catalog`` never raises: every failure comes back as a
    ``FetchResult`` tagged with its ``FetchErrorKind``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_catalog(self) -> FetchResult:
        try:
            r = self.session.get(f"{self.base_url}{PRODUCT_LIST_PATH}", timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.warning("catalog service unreachable: %s", e)
            return FetchResult.failed(FetchErrorKind.NETWORK, str(e))
        except Exception as e:
            logger.warning("catalog request failed unexpectedly: %s", e)
            return FetchResult.failed(FetchErrorKind.UNEXPECTED, str(e))

        try:
            if not r.ok:
                return _protocol_error(r.status_code, r.reason or "")
            return _decode(r.content)
        except Exception as e:
            logger.warning("catalog response handling failed: %s", e)
            return FetchResult.failed(FetchErrorKind.UNEXPECTED, str(e))

    # Async fetch (same classification, httpx transport)
    async def fetch_catalog_async(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> FetchResult:
        options = {"transport": transport}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        try:
            async with httpx.AsyncClient(**options) as client:
                r = await client.get(f"{self.base_url}{PRODUCT_LIST_PATH}")
        except httpx.TransportError as e:
            logger.warning("catalog service unreachable: %s", e)
            return FetchResult.failed(FetchErrorKind.NETWORK, str(e) or type(e).__name__)
        except Exception as e:
            logger.warning("catalog request failed unexpectedly: %s", e)
            return FetchResult.failed(FetchErrorKind.UNEXPECTED, str(e))

        try:
            if not r.is_success:
                return _protocol_error(r.status_code, r.reason_phrase)
            return _decode(r.content)
        except Exception as e:
            logger.warning("catalog response handling failed: %s", e)
            return FetchResult.failed(FetchErrorKind.UNEXPECTED, str(e))

    def health(self):
        r = self.session.get(f"{self.base_url}{HEALTH_PATH}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()
