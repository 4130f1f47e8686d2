"""
Domain models for the storefront client.

Backend payloads have an uncertain shape, so every record model declares a core
set of typed, mostly optional fields and routes any key it does not recognize
into an explicit ``extras`` mapping. Extras are preserved verbatim but never
interpreted by the client.

Derived structures (DashboardStats, PaginationState, TimeRemaining) carry their
invariants as validation rules.
"""
from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    NonNegativeInt,
    ValidationInfo,
    field_validator,
    model_validator,
)


def _as_text(value: Any) -> Any:
    """Backends disagree on numeric vs string identifiers; normalize to str."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _as_loose_text(value: Any) -> Any:
    """Render any JSON scalar or structure as text; ``false`` reads as absent."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), default=str)


def _epoch_millis_to_iso(value: Any) -> Any:
    """Numeric timestamps are epoch milliseconds; render them as ISO-8601 UTC."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    try:
        moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(value)
    return moment.isoformat().replace("+00:00", "Z")


class OpenRecord(BaseModel):
    """
    Base for records received from the backend.

    Keys matching a declared field (by name or any accepted alias) populate that
    field; everything else lands in ``extras``.
    """

    extras: Dict[str, Any] = Field(
        default_factory=dict, description="Unrecognized payload fields, preserved as-is."
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @classmethod
    def _known_keys(cls) -> Set[str]:
        known: Set[str] = set()
        for name, info in cls.model_fields.items():
            if name == "extras":
                continue
            known.add(name)
            if info.alias:
                known.add(info.alias)
            alias = info.validation_alias
            if isinstance(alias, AliasChoices):
                known.update(choice for choice in alias.choices if isinstance(choice, str))
            elif isinstance(alias, str):
                known.add(alias)
        return known

    @model_validator(mode="before")
    @classmethod
    def _split_extras(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = cls._known_keys()
        core = {key: value for key, value in data.items() if key in known}
        core["extras"] = {key: value for key, value in data.items() if key not in known}
        return core


class UserRecord(OpenRecord):
    """
    A user/client account as returned by any of the account listing resources.
    """

    id: str = Field(..., description="Account identifier.")
    name: Optional[str] = Field(None, description="Display name.")
    email: Optional[str] = Field(None, description="Contact email, may be blank.")
    phone: Optional[str] = Field(None, description="Contact phone, matched case-sensitively.")
    created_at: Optional[str] = Field(
        None, alias="createdAt", description="Creation timestamp, unparsed."
    )
    status: Optional[str] = Field(None, description="Enum-like status; absent means active.")

    @field_validator("id", "phone", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("name", "email", mode="before")
    @classmethod
    def _coerce_loose_text(cls, value: Any) -> Any:
        return _as_loose_text(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Any:
        # false and 0 read as "no status", like a missing field
        if isinstance(value, (bool, int, float)) and not value:
            return None
        return _as_loose_text(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value: Any) -> Any:
        return _as_text(_epoch_millis_to_iso(value))

    @property
    def status_label(self) -> str:
        return self.status or "Active"


class Brand(BaseModel):
    name: str = Field("", alias="brandName")
    short_name: Optional[str] = Field(None, alias="shortName")

    model_config = {"frozen": True, "populate_by_name": True}


class CategoryRef(BaseModel):
    name: str = Field("", alias="categoryName")

    model_config = {"frozen": True, "populate_by_name": True}


class Discount(BaseModel):
    """Discount descriptor attached to a product; informational only."""

    enabled: bool = False
    type: Optional[str] = None
    amount: Optional[str] = None

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Any:
        return _as_text(value)


class ProductRecord(OpenRecord):
    """
    A catalog product.

    The featured-product resource uses ``productId``/``productName``/``finalPrice``
    while the plain listing and detail resources use ``id``/``name``/``price``;
    both shapes map onto the same fields.
    """

    product_id: str = Field(..., validation_alias=AliasChoices("productId", "product_id", "id"))
    name: str = Field("", validation_alias=AliasChoices("productName", "name"))
    original_price: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("originalPrice", "original_price")
    )
    final_price: float = Field(
        0.0, validation_alias=AliasChoices("finalPrice", "final_price", "price")
    )
    thumbnail: Optional[str] = Field(None, validation_alias=AliasChoices("thumbnail", "image"))
    description: str = Field(
        "", validation_alias=AliasChoices("shortDescription", "description")
    )
    availability: str = ""
    in_stock: bool = Field(False, validation_alias=AliasChoices("inStock", "in_stock"))
    rating: str = "0"
    brand: Optional[Brand] = None
    category: Optional[CategoryRef] = None
    discount: Optional[Discount] = None
    featured: bool = False

    @field_validator("product_id", "rating", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator(
        "name",
        "original_price",
        "final_price",
        "description",
        "availability",
        "in_stock",
        "rating",
        "featured",
        mode="before",
    )
    @classmethod
    def _none_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CategoryRecord(OpenRecord):
    category_id: str = Field(..., validation_alias=AliasChoices("categoryId", "category_id", "id"))
    name: str = Field("", validation_alias=AliasChoices("categoryName", "name"))
    image_url: Optional[str] = Field(None, validation_alias=AliasChoices("imageUrl", "image_url"))
    parent_id: Optional[str] = Field(None, validation_alias=AliasChoices("parentId", "parent_id"))
    active: bool = Field(True, validation_alias=AliasChoices("status", "active"))

    @field_validator("category_id", "parent_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class DashboardStats(BaseModel):
    """
    Aggregate counts derived from the current user snapshot. Never persisted.
    """

    total_users: NonNegativeInt = 0
    active_users: NonNegativeInt = 0
    recent_users: NonNegativeInt = 0
    users_with_email: NonNegativeInt = 0

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _bounded_by_total(self) -> "DashboardStats":
        for name in ("active_users", "recent_users", "users_with_email"):
            if getattr(self, name) > self.total_users:
                raise ValueError(f"{name} cannot exceed total_users")
        return self


class PaginationState(BaseModel):
    """
    Page cursor over a filtered listing.

    ``current_page`` is always kept within ``[1, max(total_pages, 1)]``.
    """

    current_page: int = Field(1, ge=1)
    items_per_page: int = Field(10, ge=1)
    total_items: NonNegativeInt = 0

    model_config = {"frozen": True}

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.items_per_page)

    @model_validator(mode="after")
    def _page_in_range(self) -> "PaginationState":
        if self.current_page > max(self.total_pages, 1):
            raise ValueError(
                f"current_page {self.current_page} outside 1..{max(self.total_pages, 1)}"
            )
        return self


class TimeRemaining(BaseModel):
    """Countdown state. No field is ever negative."""

    days: NonNegativeInt = 0
    hours: int = Field(0, ge=0, le=23)
    minutes: int = Field(0, ge=0, le=59)
    seconds: int = Field(0, ge=0, le=59)

    model_config = {"frozen": True}

    @property
    def is_zero(self) -> bool:
        return self.days == self.hours == self.minutes == self.seconds == 0

    @property
    def total_seconds(self) -> int:
        return ((self.days * 24 + self.hours) * 60 + self.minutes) * 60 + self.seconds

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.days, self.hours, self.minutes, self.seconds)


__all__ = [
    "Brand",
    "CategoryRecord",
    "CategoryRef",
    "DashboardStats",
    "Discount",
    "OpenRecord",
    "PaginationState",
    "ProductRecord",
    "TimeRemaining",
    "UserRecord",
]
