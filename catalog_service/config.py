# catalog_service/config.py
from typing import List

from pydantic import BaseModel, Field

DEFAULT_ALLOWED_ORIGINS = ["http://localhost:5273", "https://localhost:7299"]
PRODUCT_LIST_PATH = "/api/productlist"
HEALTH_PATH = "/health"


class ServiceSettings(BaseModel):
    allowed_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    output_cache_seconds: float = Field(default=300, gt=0)
    cached_paths: List[str] = Field(default_factory=lambda: [PRODUCT_LIST_PATH])
    host: str = "0.0.0.0"
    port: int = 8085
    log_level: str = "info"
