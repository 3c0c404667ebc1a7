import json
import logging
import requests
from src.config import SourceConfig
from src.models import NOT_CONFIGURED, FetchResult, RawPage

logger = logging.getLogger(__name__)

LODGINGS_QUERY = """{
  "total": count(*[_type == "lodging"]),
  "items": *[_type == "lodging"] | order(_updatedAt desc) [$skip...$end] {
    _id,
    title,
    "slug": slug.current,
    shortDescription,
    description,
    "category": category->key,
    location{lat, lng},
    city, region, country,
    "images": images[].asset->url,
    priceFrom,
    bookingUrl,
    featured
  }
}"""


class SanityClient:
    def __init__(self, config: SourceConfig, session: requests.Session | None = None):
        self.endpoint = config.sanity_endpoint
        self.token = config.sanity_token
        self.timeout = config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "LodgingListings/1.0"})

    @property
    def is_configured(self) -> bool:
        # A public dataset needs no token
        return bool(self.endpoint)

    def build_query(self) -> str:
        return LODGINGS_QUERY

    def fetch(self, limit: int, skip: int = 0) -> FetchResult:
        if not self.is_configured:
            return FetchResult.failure(NOT_CONFIGURED)

        params = {
            "query": self.build_query(),
            "$skip": json.dumps(skip),
            "$end": json.dumps(skip + limit),
        }
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}

        logger.info(f"Querying Sanity limit={limit} skip={skip}")
        try:
            resp = self.session.get(self.endpoint, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            logger.warning(f"Sanity request failed: {e}")
            return FetchResult.failure(f"Sanity error: {e}")
        except ValueError as e:
            logger.warning(f"Sanity returned invalid JSON: {e}")
            return FetchResult.failure("Sanity returned invalid JSON")

        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, dict):
            logger.warning("Sanity query returned no result")
            return FetchResult.failure("Sanity error: no result")

        items = result.get("items") or []
        return FetchResult.success(RawPage(total=result.get("total") or len(items), items=items))
