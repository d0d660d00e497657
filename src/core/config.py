from os import environ
from typing import Literal

import boto3
from pydantic import BaseModel, ConfigDict

_cached_clerk_secret: str | None = None


def _resolve_clerk_secret() -> str:
    """Fetch Clerk secret from Secrets Manager at runtime, with caching."""
    global _cached_clerk_secret
    if _cached_clerk_secret is not None:
        return _cached_clerk_secret

    # Local dev: use env var directly
    direct = environ.get("CLERK_SECRET_KEY", "")
    if direct:
        _cached_clerk_secret = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get("CLERK_SECRET_ARN", "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager")
    _cached_clerk_secret = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_clerk_secret


def _default_backend() -> str:
    explicit = environ.get("DATABASE_BACKEND")
    if explicit:
        return explicit.lower()
    return "postgres" if environ.get("DATABASE_URL") else "sqlite"


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    environment: str
    log_level: str = "INFO"
    database_backend: Literal["sqlite", "postgres"]
    database_url: str | None = None
    sqlite_path: str
    postgres_host: str
    postgres_port: int
    postgres_database: str
    postgres_user: str
    postgres_password: str
    database_secret_arn: str | None = None
    clerk_secret_key: str = ""
    notification_feed_limit: int = 50
    message_preview_length: int = 50


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config, for testing only."""
    global _cached_config, _cached_clerk_secret
    _cached_config = None
    _cached_clerk_secret = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        environment=environ.get("ENVIRONMENT", "local"),
        log_level=environ.get("LOG_LEVEL", "INFO"),
        database_backend=_default_backend(),
        database_url=environ.get("DATABASE_URL"),
        sqlite_path=environ.get("SQLITE_PATH", "tigo.db"),
        postgres_host=environ.get("POSTGRES_HOST", "localhost"),
        postgres_port=int(environ.get("POSTGRES_PORT", "5432")),
        postgres_database=environ.get("POSTGRES_DATABASE", "tigo"),
        postgres_user=environ.get("POSTGRES_USER", "tigo"),
        postgres_password=environ.get("POSTGRES_PASSWORD", "localdev"),
        database_secret_arn=environ.get("DATABASE_SECRET_ARN"),
        clerk_secret_key=_resolve_clerk_secret(),
        notification_feed_limit=int(environ.get("NOTIFICATION_FEED_LIMIT", "50")),
        message_preview_length=int(environ.get("MESSAGE_PREVIEW_LENGTH", "50")),
    )
    return _cached_config
