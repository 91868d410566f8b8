# catalog_service/logic.py
from datetime import datetime

from .database import CatalogStore
from .models import CatalogEnvelope, HealthStatus

# Endpoint logic, kept apart from routing so it can be called directly.


def build_envelope(store: CatalogStore, now: datetime) -> CatalogEnvelope:
    products = store.products
    return CatalogEnvelope(products=products, total_count=len(products), timestamp=now)


def health_status(now: datetime) -> HealthStatus:
    return HealthStatus(status="Healthy", timestamp=now)
