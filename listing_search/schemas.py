# listing_search/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Literal, Optional, Tuple, Union

SortKey = Literal["newest", "featured", "price_asc", "price_desc"]


class _Frozen(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ListingQuery(_Frozen):
    """Normalized, immutable search request."""
    q: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    condition: Optional[str] = None
    featured_only: bool = False
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    sort: SortKey = "newest"
    page: int = Field(1, ge=1, le=10_000)
    page_size: int = Field(24, ge=1, le=100)
    include_facets: bool = False


class ListingItemBase(_Frozen):
    id: str
    name: str
    category: Optional[str]
    subcategory: Optional[str]
    price: Optional[float]
    image: Optional[str]
    featured: bool
    location: Optional[str]
    created_at: str


class ProductItem(ListingItemBase):
    brand: Optional[str]
    condition: Optional[str]


class ServiceItem(ListingItemBase):
    rate_type: Optional[str]
    availability: Optional[str]
    service_area: Optional[str]


ListingItem = Union[ProductItem, ServiceItem]


class FacetEntry(_Frozen):
    value: str
    count: int


class PageResult(_Frozen):
    page: int
    page_size: int
    total: int
    total_pages: int
    items: Tuple[ListingItem, ...] = ()
    facets: Optional[Dict[str, Tuple[FacetEntry, ...]]] = None

    def to_json(self):
        """camelCase payload; ``facets`` is omitted unless it was requested."""
        exclude = {"facets"} if self.facets is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
