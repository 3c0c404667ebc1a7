from src.models import Listing, ListingQuery


def find_by_id(listings: list[Listing], listing_id: str) -> tuple[int, list[Listing]]:
    matches = [l for l in listings if l.id == listing_id or (l.slug and l.slug == listing_id)]
    return len(matches), matches


def _haystack(listing: Listing) -> str:
    return f"{listing.title} {listing.short_description} {listing.city}".lower()


def apply_filters(listings: list[Listing], category: str = "", search: str = "") -> list[Listing]:
    items = listings
    if category:
        wanted = category.lower()
        items = [l for l in items if l.category.lower() == wanted]
    if search:
        term = search.lower()
        items = [l for l in items if term in _haystack(l)]
    return items


def paginate(items: list[Listing], skip: int, limit: int) -> list[Listing]:
    return items[skip : skip + limit]


def select(listings: list[Listing], query: ListingQuery) -> tuple[int, list[Listing]]:
    """Return (total, page) for a query; an id lookup bypasses every other filter."""
    if query.id:
        return find_by_id(listings, query.id)

    filtered = apply_filters(listings, query.category, query.search)
    return len(filtered), paginate(filtered, query.skip, query.limit)
