import json
import logging
from src.config import load_config, resolve_secrets
from src.models import ListingQuery
from src.pipeline import fetch_listings

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

CONFIG = load_config()
_resolved_config = None

READ_METHODS = ("GET", "HEAD")


def get_config():
    global _resolved_config
    if _resolved_config is None:
        _resolved_config = resolve_secrets(CONFIG)
    return _resolved_config


def json_response(status: int, body: dict) -> dict:
    return {
        "statusCode": status,
        "headers": {
            "Content-Type": "application/json; charset=utf-8",
            "Cache-Control": "no-store",
        },
        "body": json.dumps(body, ensure_ascii=False),
    }


def error_response(status: int, message: str) -> dict:
    return json_response(status, {"error": True, "message": message})


def _request_method(event: dict) -> str:
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "GET").upper()


def lambda_handler(event, context):
    event = event or {}

    method = _request_method(event)
    if method not in READ_METHODS:
        logger.info(f"Rejecting {method} request")
        return error_response(405, f"Method {method} not allowed")

    try:
        query = ListingQuery.from_params(event.get("queryStringParameters"))
        logger.info(f"Lodgings request: {query}")

        body = fetch_listings(query, get_config())
    except Exception as e:
        logger.exception("Lodgings request failed")
        return error_response(500, str(e))

    logger.info(f"Returning {len(body['items'])} of {body['total']} lodgings")
    return json_response(200, body)
