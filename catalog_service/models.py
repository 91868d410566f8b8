# catalog_service/models.py
import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Category(WireModel):
    id: int
    name: str


class Product(WireModel):
    id: int
    name: str
    price: Decimal
    stock: int = Field(ge=0)
    category: Category
    description: str = ""
    image_url: str = ""

    @field_serializer("price")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class CatalogEnvelope(WireModel):
    products: Tuple[Product, ...]
    total_count: int
    timestamp: datetime

    @model_validator(mode="after")
    def _check_counts(self) -> "CatalogEnvelope":
        if self.total_count != len(self.products):
            raise ValueError(
                f"totalCount {self.total_count} does not match {len(self.products)} products"
            )
        ids = [p.id for p in self.products]
        if len(ids) != len(set(ids)):
            raise ValueError("product ids must be unique")
        return self


class HealthStatus(WireModel):
    status: str = "Healthy"
    timestamp: datetime


def _wire_keys() -> Dict[str, str]:
    keys: Dict[str, str] = {}
    for model in (Category, Product, CatalogEnvelope):
        for name, field in model.model_fields.items():
            alias = field.alias or name
            keys[alias.lower()] = alias
    return keys


_CANONICAL_KEYS = _wire_keys()


def fold_wire_keys(data: Any) -> Any:
    """Rewrite dict keys to their canonical wire spelling, ignoring case.

    Keys that match no known field are left untouched so validation can
    still report them.
    """
    if isinstance(data, dict):
        return {
            _CANONICAL_KEYS.get(k.lower(), k) if isinstance(k, str) else k: fold_wire_keys(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [fold_wire_keys(v) for v in data]
    return data


def decode_envelope(raw: Any) -> CatalogEnvelope:
    """Decode a JSON document (bytes, str or parsed object) into an envelope.

    Field names are matched case-insensitively. Raises ``ValueError``
    (pydantic's ``ValidationError`` included) when the shape is wrong.
    """
    if isinstance(raw, (bytes, bytearray, str)):
        raw = json.loads(raw)
    return CatalogEnvelope.model_validate(fold_wire_keys(raw))


def encode_envelope(envelope: CatalogEnvelope) -> bytes:
    return envelope.model_dump_json(by_alias=True).encode("utf-8")

