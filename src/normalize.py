import logging
import math
from src.models import Listing, Location

logger = logging.getLogger(__name__)


def _first(*values):
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _record_id(raw: dict) -> str:
    sys_id = _dict(raw.get("sys")).get("id")
    return _text(_first(sys_id, raw.get("_id"), raw.get("id"), _slug(raw) or None))


def _slug(raw: dict) -> str:
    slug = raw.get("slug")
    if isinstance(slug, dict):
        return _text(slug.get("current"))
    return _text(slug)


def _category(raw: dict) -> str:
    category = raw.get("category")
    if isinstance(category, dict):
        category = category.get("key")
    return _text(category).lower()


def _location(raw: dict) -> Location | None:
    loc = raw.get("location")
    if not isinstance(loc, dict):
        return None

    lat = _number(loc.get("lat"))
    lng = _number(_first(loc.get("lon"), loc.get("lng")))
    if lat is None or lng is None:
        return None

    return Location(
        lat=lat,
        lng=lng,
        city=_text(_first(raw.get("city"), loc.get("city"))),
        region=_text(_first(raw.get("region"), loc.get("region"))),
        country=_text(_first(raw.get("country"), loc.get("country"))),
    )


def _image_url(entry) -> str:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        return _text(_first(entry.get("url"), _dict(entry.get("asset")).get("url")))
    return ""


def _images(raw: dict) -> list[str]:
    collection = _dict(raw.get("imagesCollection")).get("items")
    entries = _first(collection, raw.get("images")) or []
    if not isinstance(entries, list):
        return []
    return [url for url in (_image_url(e) for e in entries) if url]


def normalize(raw: dict) -> Listing:
    """Map a Contentful or Sanity lodging record to a Listing."""
    price = _number(raw.get("priceFrom"))
    return Listing(
        id=_record_id(raw),
        slug=_slug(raw),
        title=_text(raw.get("title")),
        short_description=_text(raw.get("shortDescription")),
        description=_text(raw.get("description")),
        category=_category(raw),
        location=_location(raw),
        images=_images(raw),
        price_from=price if price is not None else 0,
        booking_url=_text(raw.get("bookingUrl")),
        featured=bool(raw.get("featured")),
    )


def normalize_all(raws: list) -> list[Listing]:
    listings = []
    for raw in raws or []:
        if not isinstance(raw, dict):
            logger.warning(f"Skipping non-object record: {raw!r}")
            continue
        listings.append(normalize(raw))
    return listings
