import logging
from src.config import BACKENDS, SourceConfig
from src.filters import select
from src.models import MAX_LIMIT, NOT_CONFIGURED, ListingQuery, RawPage
from src.normalize import normalize_all
from src.sources.contentful import ContentfulClient
from src.sources.sanity import SanityClient
from src.sources.seed import read_seed

logger = logging.getLogger(__name__)


def make_client(config: SourceConfig, session=None):
    if config.backend not in BACKENDS:
        raise ValueError(f"Unknown lodging backend: {config.backend!r}")
    if config.backend == "sanity":
        return SanityClient(config, session=session)
    return ContentfulClient(config, session=session)


def load_raw(config: SourceConfig, client=None) -> RawPage:
    """Fetch raw records from the remote source, or the seed snapshot when it fails."""
    client = client or make_client(config)

    # Filtering happens in-process, so always pull the full first page
    result = client.fetch(MAX_LIMIT, 0)
    if result.ok:
        logger.info(f"Remote source returned {len(result.page.items)} of {result.page.total} records")
        return result.page

    if result.reason == NOT_CONFIGURED:
        logger.info("Remote source not configured, using seed snapshot")
    else:
        logger.warning(f"Remote source unavailable ({result.reason}), using seed snapshot")
    return read_seed(config.seed_path)


def fetch_listings(query: ListingQuery, config: SourceConfig, client=None) -> dict:
    page = load_raw(config, client=client)
    listings = normalize_all(page.items)
    total, items = select(listings, query)
    return {"total": total, "items": [l.to_dict() for l in items]}
