import json
import logging
import pathlib
from src.models import RawPage

logger = logging.getLogger(__name__)


class SeedError(RuntimeError):
    """The local snapshot is missing or unreadable."""


def read_seed(path: str | pathlib.Path) -> RawPage:
    path = pathlib.Path(path)
    logger.info(f"Reading seed snapshot {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SeedError(f"Seed snapshot not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SeedError(f"Seed snapshot unreadable: {path}: {e}") from e

    if isinstance(data, list):
        items = data
        total = len(items)
    elif isinstance(data, dict) and isinstance(data.get("items", []), list):
        items = data.get("items") or []
        total = data.get("total") or len(items)
    else:
        raise SeedError(f"Seed snapshot has no item list: {path}")

    return RawPage(total=total, items=items)
