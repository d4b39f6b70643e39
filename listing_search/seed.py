# listing_search/seed.py
"""Insert demonstration products and services.

Run from the project root:

    python -m listing_search.seed --products 60 --services 40
"""
import argparse
import random
from datetime import datetime, timedelta, timezone

from .db import Base, SessionLocal, engine
from .models import ListingStatus, Product, Service
from .utils import logger

PRODUCT_CATALOG = {
    "Phones & Tablets": ("Samsung", "Apple", "Tecno", "Infinix"),
    "Electronics": ("Sony", "LG", "Hisense"),
    "Fashion": ("Nike", "Adidas", "Zara"),
    "Home & Garden": ("Ikea", "Philips"),
}
SERVICE_CATALOG = {
    "Home Services": ("Plumbing", "Cleaning", "Electrical"),
    "Beauty": ("Hair", "Makeup"),
    "Tech": ("Phone Repair", "Web Design"),
}
LOCATIONS = ("Nairobi", "Mombasa", "Kisumu", "Nakuru", "Eldoret")
COLORS = ("red", "black", "blue", "white", "silver")
# mostly active, with a few of every other lifecycle state
STATUSES = [ListingStatus.ACTIVE] * 8 + [ListingStatus.DRAFT, ListingStatus.PAUSED, ListingStatus.ARCHIVED]


def _price(rnd):
    # roughly one in eight listings is "contact for price"
    return None if rnd.random() < 0.125 else float(rnd.randrange(500, 250_000, 50))


def make_products(rnd, count, now):
    rows = []
    for i in range(count):
        category = rnd.choice(list(PRODUCT_CATALOG))
        brand = rnd.choice(PRODUCT_CATALOG[category])
        color = rnd.choice(COLORS)
        rows.append(Product(
            name=f"{brand} {category.split()[0]} {i + 1}",
            description=f"{color} {brand} in good shape",
            category=category,
            brand=brand,
            condition=rnd.choice(("brand new", "pre-owned")),
            price=_price(rnd),
            featured=rnd.random() < 0.2,
            location=rnd.choice(LOCATIONS),
            status=rnd.choice(STATUSES).value,
            created_at=now - timedelta(hours=i),
        ))
    return rows


def make_services(rnd, count, now):
    rows = []
    for i in range(count):
        category = rnd.choice(list(SERVICE_CATALOG))
        subcategory = rnd.choice(SERVICE_CATALOG[category])
        area = rnd.choice(LOCATIONS)
        rows.append(Service(
            name=f"{subcategory} pro {i + 1}",
            description=f"Reliable {subcategory.lower()} around {area}",
            category=category,
            subcategory=subcategory,
            rate_type=rnd.choice(("hour", "day", "fixed")),
            availability=rnd.choice(("weekdays", "weekends", "24/7")),
            service_area=area,
            price=_price(rnd),
            featured=rnd.random() < 0.2,
            location=area,
            status=rnd.choice(STATUSES).value,
            created_at=now - timedelta(hours=i),
        ))
    return rows


def seed(db, products=60, services=40, random_seed=7):
    rnd = random.Random(random_seed)
    now = datetime.now(timezone.utc)
    rows = make_products(rnd, products, now) + make_services(rnd, services, now)
    db.add_all(rows)
    db.commit()
    return len(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed demo listings")
    parser.add_argument("--products", type=int, default=60)
    parser.add_argument("--services", type=int, default=40)
    parser.add_argument("--seed", type=int, default=7, help="random seed")
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        inserted = seed(db, args.products, args.services, args.seed)
    finally:
        db.close()
    logger.info("Inserted %d listings", inserted)


if __name__ == "__main__":
    main()
