import logging
import requests
from src.config import SourceConfig
from src.models import NOT_CONFIGURED, FetchResult, RawPage

logger = logging.getLogger(__name__)

LODGINGS_QUERY = """
query Lodgings($limit: Int!, $skip: Int!) {
  lodgingCollection(limit: $limit, skip: $skip, order: sys_publishedAt_DESC) {
    total
    items {
      sys { id }
      title
      slug
      shortDescription
      description
      category { key }
      location { lat lon }
      city
      region
      country
      imagesCollection(limit: 10) { items { url(transform: { quality: 75 }) } }
      priceFrom
      bookingUrl
      featured
    }
  }
}
"""


class ContentfulClient:
    def __init__(self, config: SourceConfig, session: requests.Session | None = None):
        self.endpoint = config.contentful_endpoint
        self.token = config.contentful_token
        self.timeout = config.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "LodgingListings/1.0"})

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.token)

    def build_query(self) -> str:
        return LODGINGS_QUERY

    def fetch(self, limit: int, skip: int = 0) -> FetchResult:
        if not self.is_configured:
            return FetchResult.failure(NOT_CONFIGURED)

        logger.info(f"Querying Contentful limit={limit} skip={skip}")
        try:
            resp = self.session.post(
                self.endpoint,
                json={"query": self.build_query(), "variables": {"limit": limit, "skip": skip}},
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            logger.warning(f"Contentful request failed: {e}")
            return FetchResult.failure(f"Contentful error: {e}")
        except ValueError as e:
            logger.warning(f"Contentful returned invalid JSON: {e}")
            return FetchResult.failure("Contentful returned invalid JSON")

        if not isinstance(payload, dict):
            payload = {}
        data = payload.get("data")
        collection = data.get("lodgingCollection") if isinstance(data, dict) else None
        if not isinstance(collection, dict):
            errors = payload.get("errors")
            first = errors[0] if isinstance(errors, list) and errors else errors
            message = first.get("message") if isinstance(first, dict) else first
            message = message if isinstance(message, str) and message else "no data"
            logger.warning(f"Contentful query returned no collection: {message}")
            return FetchResult.failure(f"Contentful error: {message}")

        items = collection.get("items") or []
        return FetchResult.success(RawPage(total=collection.get("total") or 0, items=items))
