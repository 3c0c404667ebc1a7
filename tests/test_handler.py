import json
import pathlib
from unittest.mock import patch
from src.config import SourceConfig

FIXTURES = pathlib.Path(__file__).parent / "fixtures"
CONFIG = SourceConfig(seed_path=str(FIXTURES / "seed_lodgings.json"))


def _event(**params) -> dict:
    return {"httpMethod": "GET", "queryStringParameters": params or None}


@patch("src.handler.get_config", return_value=CONFIG)
def test_handler_returns_listings(_mock_config):
    from src.handler import lambda_handler

    resp = lambda_handler(_event(category="surf", limit="2"), None)

    assert resp["statusCode"] == 200
    assert resp["headers"]["Cache-Control"] == "no-store"
    assert resp["headers"]["Content-Type"].startswith("application/json")
    body = json.loads(resp["body"])
    assert body["total"] == 3
    assert [item["id"] for item in body["items"]] == ["s1", "s2"]


@patch("src.handler.get_config", return_value=CONFIG)
def test_handler_without_query_string(_mock_config):
    from src.handler import lambda_handler

    resp = lambda_handler({"queryStringParameters": None}, None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"])["total"] == 5


@patch("src.handler.get_config", return_value=CONFIG)
def test_handler_empty_result_is_200(_mock_config):
    from src.handler import lambda_handler

    resp = lambda_handler(_event(id="does-not-exist"), None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"total": 0, "items": []}


@patch("src.handler.get_config", return_value=CONFIG)
def test_handler_keeps_unicode(_mock_config):
    from src.handler import lambda_handler

    resp = lambda_handler(_event(id="gite-des-gorges"), None)

    assert "Gîte des Gorges" in resp["body"]


@patch("src.handler.get_config", return_value=SourceConfig(seed_path="/nonexistent/seed.json"))
def test_handler_missing_seed_is_500(_mock_config):
    from src.handler import lambda_handler

    resp = lambda_handler(_event(), None)

    assert resp["statusCode"] == 500
    assert resp["headers"]["Cache-Control"] == "no-store"
    body = json.loads(resp["body"])
    assert body["error"] is True
    assert "Seed snapshot not found" in body["message"]
    assert "Traceback" not in body["message"]


@patch("src.handler.fetch_listings")
@patch("src.handler.get_config", return_value=CONFIG)
def test_handler_unexpected_error_is_500(_mock_config, mock_fetch):
    from src.handler import lambda_handler

    mock_fetch.side_effect = KeyError("items")

    resp = lambda_handler(_event(), None)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": True, "message": "'items'"}


@patch("src.handler.fetch_listings")
def test_handler_rejects_writes(mock_fetch):
    from src.handler import lambda_handler

    resp = lambda_handler({"requestContext": {"http": {"method": "POST"}}}, None)

    assert resp["statusCode"] == 405
    assert json.loads(resp["body"])["error"] is True
    mock_fetch.assert_not_called()


@patch("src.handler.resolve_secrets")
def test_get_config_resolves_secrets_once(mock_resolve):
    import src.handler as handler

    mock_resolve.return_value = CONFIG
    with patch.object(handler, "_resolved_config", None):
        assert handler.get_config() is CONFIG
        assert handler.get_config() is CONFIG

    mock_resolve.assert_called_once_with(handler.CONFIG)
