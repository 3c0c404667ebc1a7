import json
import logging
import os
from dataclasses import dataclass, replace
from urllib.parse import quote
import boto3

logger = logging.getLogger(__name__)

BACKENDS = ("contentful", "sanity")


@dataclass(frozen=True)
class SourceConfig:
    backend: str = "contentful"
    contentful_space: str = ""
    contentful_env: str = "master"
    contentful_token: str = ""
    contentful_token_secret_id: str = ""
    sanity_project_id: str = ""
    sanity_dataset: str = "production"
    sanity_api_version: str = "2024-08-01"
    sanity_token: str = ""
    sanity_use_cdn: bool = True
    seed_path: str = "data/seed-lodgings.json"
    request_timeout: float = 10.0

    @property
    def contentful_endpoint(self) -> str | None:
        if not self.contentful_space or not self.contentful_env:
            return None
        return (
            "https://graphql.contentful.com/content/v1/spaces/"
            f"{quote(self.contentful_space)}/environments/{quote(self.contentful_env)}"
        )

    @property
    def sanity_endpoint(self) -> str | None:
        if not self.sanity_project_id:
            return None
        host = "apicdn" if self.sanity_use_cdn else "api"
        return (
            f"https://{self.sanity_project_id}.{host}.sanity.io"
            f"/v{self.sanity_api_version}/data/query/{self.sanity_dataset}"
        )


def _as_bool(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def _as_float(value: str, default: float) -> float:
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number {value!r}, using {default}")
        return default


def load_config(environ=None) -> SourceConfig:
    env = os.environ if environ is None else environ
    return SourceConfig(
        backend=env.get("LODGING_BACKEND", "contentful").strip().lower(),
        contentful_space=env.get("CONTENTFUL_SPACE", ""),
        contentful_env=env.get("CONTENTFUL_ENV", "master"),
        contentful_token=env.get("CONTENTFUL_CDA_TOKEN", ""),
        contentful_token_secret_id=env.get("CONTENTFUL_TOKEN_SECRET_ID", ""),
        sanity_project_id=env.get("SANITY_API_PROJECT_ID", ""),
        sanity_dataset=env.get("SANITY_API_DATASET", "production"),
        sanity_api_version=env.get("SANITY_API_VERSION", "2024-08-01"),
        sanity_token=env.get("SANITY_API_READ_TOKEN", ""),
        sanity_use_cdn=_as_bool(env.get("SANITY_USE_CDN", "true")),
        seed_path=env.get("LODGING_SEED_PATH", "data/seed-lodgings.json"),
        request_timeout=_as_float(env.get("LODGING_REQUEST_TIMEOUT", "10"), 10.0),
    )


def _token_from_secret(secret_string: str) -> str:
    try:
        data = json.loads(secret_string)
    except json.JSONDecodeError:
        return secret_string.strip()
    if isinstance(data, dict):
        return str(data.get("api_key") or data.get("token") or "")
    if isinstance(data, str):
        return data
    return ""


def resolve_secrets(config: SourceConfig) -> SourceConfig:
    """Fill the Contentful token from Secrets Manager when only a secret id is set."""
    if config.contentful_token or not config.contentful_token_secret_id:
        return config

    try:
        client = boto3.client("secretsmanager")
        resp = client.get_secret_value(SecretId=config.contentful_token_secret_id)
    except Exception as e:
        logger.warning(f"Could not read secret {config.contentful_token_secret_id}: {e}")
        return config

    token = _token_from_secret(resp.get("SecretString", ""))
    if not token:
        logger.warning(f"Secret {config.contentful_token_secret_id} holds no token")
        return config
    return replace(config, contentful_token=token)
