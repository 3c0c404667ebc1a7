from dataclasses import dataclass, field

DEFAULT_LIMIT = 50
MAX_LIMIT = 200
NOT_CONFIGURED = "not configured"


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float
    city: str = ""
    region: str = ""
    country: str = ""

    def to_dict(self) -> dict:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "city": self.city,
            "region": self.region,
            "country": self.country,
        }


@dataclass(frozen=True)
class Listing:
    id: str
    title: str = ""
    short_description: str = ""
    description: str = ""
    category: str = ""
    location: Location | None = None
    images: list[str] = field(default_factory=list)
    price_from: float = 0
    booking_url: str = ""
    featured: bool = False
    slug: str = ""

    @property
    def city(self) -> str:
        return self.location.city if self.location else ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "shortDescription": self.short_description,
            "description": self.description,
            "category": self.category,
            "location": self.location.to_dict() if self.location else None,
            "images": list(self.images),
            "priceFrom": self.price_from,
            "bookingUrl": self.booking_url,
            "featured": self.featured,
        }


@dataclass
class RawPage:
    total: int
    items: list[dict]


@dataclass
class FetchResult:
    ok: bool
    page: RawPage | None = None
    reason: str = ""

    @classmethod
    def success(cls, page: RawPage) -> "FetchResult":
        return cls(ok=True, page=page)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(ok=False, reason=reason)


def _parse_int(value, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ListingQuery:
    category: str = ""
    search: str = ""
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    id: str = ""

    @classmethod
    def from_params(cls, params: dict | None) -> "ListingQuery":
        params = params or {}

        limit = _parse_int(params.get("limit"), DEFAULT_LIMIT)
        if limit < 1:
            limit = DEFAULT_LIMIT
        skip = max(_parse_int(params.get("skip"), 0), 0)

        return cls(
            category=(params.get("category") or "").lower(),
            search=(params.get("search") or "").lower(),
            limit=min(limit, MAX_LIMIT),
            skip=skip,
            id=params.get("id") or "",
        )
