# catalog_sdk/config.py
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel

from .view import FRESHNESS_WINDOW

DEFAULT_BASE_URL = "http://localhost:8085"


class ViewSettings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    # None means the transport default
    timeout: Optional[float] = None
    freshness_window: timedelta = FRESHNESS_WINDOW
