# listing_search/kinds.py
"""Listing kind descriptors.

A ``ListingKind`` tells the generic engine everything that differs between
products and services: which table to read, which columns to project into
items, which scalar filters apply, which columns the free-text search covers
and which facet dimensions to aggregate.
"""
from dataclasses import dataclass
from typing import Tuple, Type

from .models import Product, Service
from .schemas import ListingItemBase, ProductItem, ServiceItem

PLACEHOLDER_NAME = "Untitled"


@dataclass(frozen=True)
class FacetDimension:
    key: str       # name in the response, e.g. "categories"
    field: str     # grouped column
    limit: int


@dataclass(frozen=True)
class ListingKind:
    name: str
    model: type
    item_schema: Type[ListingItemBase]
    projection: Tuple[str, ...]
    filter_fields: Tuple[str, ...]
    search_fields: Tuple[str, ...]
    facets: Tuple[FacetDimension, ...]

    def column(self, field):
        return getattr(self.model, field)

    def to_item(self, row):
        """Map a projected row to a typed item, coalescing missing values to None."""
        data = {field: row.get(field) for field in self.projection}
        created_at = data.get("created_at")
        data["name"] = data.get("name") or PLACEHOLDER_NAME
        data["featured"] = bool(data.get("featured"))
        data["created_at"] = created_at.isoformat() if created_at is not None else ""
        data["id"] = str(data["id"])
        return self.item_schema(**data)


_COMMON_PROJECTION = (
    "id", "name", "category", "subcategory", "price", "image",
    "featured", "location", "created_at",
)

PRODUCT = ListingKind(
    name="product",
    model=Product,
    item_schema=ProductItem,
    projection=_COMMON_PROJECTION + ("brand", "condition"),
    filter_fields=("category", "subcategory", "brand", "condition"),
    search_fields=("name", "category", "subcategory", "brand", "description", "location"),
    facets=(
        FacetDimension("categories", "category", 20),
        FacetDimension("brands", "brand", 20),
        FacetDimension("conditions", "condition", 5),
    ),
)

SERVICE = ListingKind(
    name="service",
    model=Service,
    item_schema=ServiceItem,
    projection=_COMMON_PROJECTION + ("rate_type", "availability", "service_area"),
    filter_fields=("category", "subcategory"),
    search_fields=(
        "name", "category", "subcategory", "description",
        "availability", "service_area", "location",
    ),
    facets=(
        FacetDimension("categories", "category", 20),
        FacetDimension("subcategories", "subcategory", 20),
    ),
)
