from listing_search.filters import search_tokens
from listing_search.kinds import PRODUCT, SERVICE
from listing_search.models import ListingStatus
from listing_search.services import search_listings


def _names(result):
    return sorted(item.name for item in result.items)


def test_search_tokens_lowercase_and_cap():
    assert search_tokens("Red  PHONE\tcase") == ["red", "phone", "case"]
    assert search_tokens("a b c d e f g h") == ["a", "b", "c", "d", "e", "f"]
    assert search_tokens(None) == []
    assert search_tokens("") == []


def test_inactive_listings_are_invisible(db, add_product):
    add_product(name="live")
    for status in (ListingStatus.DRAFT, ListingStatus.PAUSED, ListingStatus.ARCHIVED):
        add_product(name=status.value.lower(), status=status.value)

    result = search_listings(db, PRODUCT, {"status": "DRAFT"})
    assert result.total == 1
    assert _names(result) == ["live"]


def test_tokens_may_match_different_fields(db, add_product):
    add_product(name="Phone X", description="comes with a red case")
    add_product(name="Red shirt")
    add_product(name="Old phone")

    result = search_listings(db, PRODUCT, {"q": "red phone"})
    assert _names(result) == ["Phone X"]


def test_search_is_case_insensitive_substring(db, add_product):
    add_product(name="iPhone 13", brand="Apple", location="Westlands")
    add_product(name="Galaxy", brand="Samsung")

    assert _names(search_listings(db, PRODUCT, {"q": "APPLE"})) == ["iPhone 13"]
    assert _names(search_listings(db, PRODUCT, {"q": "phon"})) == ["iPhone 13"]
    assert _names(search_listings(db, PRODUCT, {"q": "westlands"})) == ["iPhone 13"]


def test_seventh_token_is_ignored(db, add_product):
    add_product(name="alpha beta gamma delta epsilon zeta")
    add_product(name="alpha only")

    six = search_listings(db, PRODUCT, {"q": "alpha beta gamma delta epsilon zeta"})
    seven = search_listings(db, PRODUCT, {"q": "alpha beta gamma delta epsilon zeta omega"})
    assert six.total == 1
    assert seven == six


def test_blank_query_disables_search(db, add_product):
    add_product(name="one")
    add_product(name="two")

    assert search_listings(db, PRODUCT, {"q": "   "}).total == 2


def test_like_wildcards_match_literally(db, add_product):
    add_product(name="100% cotton tee")
    add_product(name="1000 pieces puzzle")
    add_product(name="snake_case mug")
    add_product(name="snakeXcase mug")

    assert _names(search_listings(db, PRODUCT, {"q": "100%"})) == ["100% cotton tee"]
    assert _names(search_listings(db, PRODUCT, {"q": "snake_case"})) == ["snake_case mug"]


def test_scalar_filters_are_case_insensitive_equality(db, add_product):
    add_product(name="a", category="Phones", brand="Apple", condition="brand new")
    add_product(name="b", category="Phones & Tablets", brand="Apple", condition="pre-owned")
    add_product(name="c", category="phones", brand="Samsung", condition="pre-owned")

    assert _names(search_listings(db, PRODUCT, {"category": "PHONES"})) == ["a", "c"]
    assert _names(search_listings(db, PRODUCT, {"category": "phones", "brand": "apple"})) == ["a"]
    assert _names(search_listings(db, PRODUCT, {"condition": "Pre-Owned"})) == ["b", "c"]


def test_featured_only(db, add_product):
    add_product(name="plain", featured=False)
    add_product(name="shiny", featured=True)

    assert _names(search_listings(db, PRODUCT, {"featuredOnly": "1"})) == ["shiny"]
    assert _names(search_listings(db, PRODUCT, {"featuredOnly": "0"})) == ["plain", "shiny"]


def test_price_range(db, add_product):
    add_product(name="p50", price=50)
    add_product(name="p100", price=100)
    add_product(name="p200", price=200)

    assert _names(search_listings(db, PRODUCT, {"minPrice": "100"})) == ["p100", "p200"]
    assert _names(search_listings(db, PRODUCT, {"maxPrice": "100"})) == ["p100", "p50"]
    assert _names(search_listings(db, PRODUCT, {"minPrice": "60", "maxPrice": "150"})) == ["p100"]
    assert search_listings(db, PRODUCT, {"minPrice": "300", "maxPrice": "10"}).total == 0


def test_null_price_only_excluded_by_explicit_bound(db, add_product):
    add_product(name="ask", price=None)

    assert search_listings(db, PRODUCT, {"minPrice": "100"}).total == 0
    assert search_listings(db, PRODUCT, {"maxPrice": "100"}).total == 0
    assert search_listings(db, PRODUCT, {"minPrice": "junk"}).total == 1
    assert search_listings(db, PRODUCT, {}).total == 1


def test_service_search_fields(db, add_service):
    add_service(name="Plumber", service_area="Kilimani", availability="weekends")
    add_service(name="Cleaner", description="deep cleaning", subcategory="Cleaning")

    assert _names(search_listings(db, SERVICE, {"q": "kilimani"})) == ["Plumber"]
    assert _names(search_listings(db, SERVICE, {"q": "weekend plumber"})) == ["Plumber"]
    assert _names(search_listings(db, SERVICE, {"q": "deep"})) == ["Cleaner"]


def test_product_only_filters_do_not_apply_to_services(db, add_service):
    add_service(name="Tutor", category="Education")

    result = search_listings(db, SERVICE, {"brand": "Apple", "condition": "brand new"})
    assert result.total == 1
    assert _names(search_listings(db, SERVICE, {"category": "education"})) == ["Tutor"]
