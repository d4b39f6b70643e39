# listing_search/models.py
"""SQLAlchemy ORM models for the two listing kinds.

``Product`` and ``Service`` share the common listing columns through
``ListingColumns``; each adds its kind-specific attributes. Indexes mirror the
access paths of the search engine (status first, then sort keys).
"""
import enum
import uuid
from sqlalchemy import Column, Text, String, Float, Boolean, TIMESTAMP, func, Index
from .db import Base


class ListingStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    PAUSED = "PAUSED"
    ARCHIVED = "ARCHIVED"


def _new_id():
    return uuid.uuid4().hex


class ListingColumns:
    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text)
    subcategory = Column(Text)
    price = Column(Float)
    image = Column(Text)
    featured = Column(Boolean, nullable=False, default=False)
    location = Column(Text)
    status = Column(String(16), nullable=False, default=ListingStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())


class Product(ListingColumns, Base):
    __tablename__ = "products"
    brand = Column(Text)
    condition = Column(Text)  # "brand new" | "pre-owned"


class Service(ListingColumns, Base):
    __tablename__ = "services"
    rate_type = Column(String(8))  # "hour" | "day" | "fixed"
    availability = Column(Text)
    service_area = Column(Text)


Index("idx_products_status_created", Product.status, Product.created_at)
Index("idx_products_status_featured_created", Product.status, Product.featured, Product.created_at)
Index("idx_products_status_price", Product.status, Product.price)
Index("idx_services_status_created", Service.status, Service.created_at)
Index("idx_services_status_featured_created", Service.status, Service.featured, Service.created_at)
Index("idx_services_status_price", Service.status, Service.price)
