"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pydantic
import pytest

from core.config import _reset_config, get_config


@pytest.fixture(autouse=True)
def _clear_config_cache():
    _reset_config()
    yield
    _reset_config()


def test_get_config_defaults():
    """Test that get_config provides sensible local defaults."""
    with patch.dict(os.environ, {}, clear=True):
        config = get_config()
        assert config.aws_region == "us-east-1"
        assert config.environment == "local"
        assert config.log_level == "INFO"
        assert config.database_backend == "sqlite"
        assert config.sqlite_path == "tigo.db"
        assert config.postgres_host == "localhost"
        assert config.postgres_port == 5432
        assert config.database_url is None
        assert config.notification_feed_limit == 50
        assert config.message_preview_length == 50


def test_database_url_selects_postgres():
    with patch.dict(os.environ, {"DATABASE_URL": "postgresql://u:p@db:5432/tigo"}, clear=True):
        config = get_config()
        assert config.database_backend == "postgres"
        assert config.database_url == "postgresql://u:p@db:5432/tigo"


def test_explicit_backend_wins_over_database_url():
    env = {"DATABASE_URL": "postgresql://u:p@db:5432/tigo", "DATABASE_BACKEND": "SQLite"}
    with patch.dict(os.environ, env, clear=True):
        assert get_config().database_backend == "sqlite"


def test_unknown_backend_rejected():
    with patch.dict(os.environ, {"DATABASE_BACKEND": "mysql"}, clear=True):
        with pytest.raises(pydantic.ValidationError):
            get_config()


def test_postgres_port_string_coercion():
    with patch.dict(os.environ, {"POSTGRES_PORT": "5433"}, clear=False):
        config = get_config()
        assert config.postgres_port == 5433
        assert isinstance(config.postgres_port, int)


def test_feed_limit_and_preview_length_from_env():
    env = {"NOTIFICATION_FEED_LIMIT": "20", "MESSAGE_PREVIEW_LENGTH": "80"}
    with patch.dict(os.environ, env, clear=True):
        config = get_config()
        assert config.notification_feed_limit == 20
        assert config.message_preview_length == 80


def test_clerk_secret_read_from_env():
    with patch.dict(os.environ, {"CLERK_SECRET_KEY": "sk_test_abc"}, clear=True):
        assert get_config().clerk_secret_key == "sk_test_abc"


def test_clerk_secret_fetched_from_secrets_manager():
    with patch.dict(os.environ, {"CLERK_SECRET_ARN": "arn:aws:secretsmanager:clerk"}, clear=True):
        with patch("core.config.boto3") as mock_boto3:
            mock_boto3.client.return_value.get_secret_value.return_value = {"SecretString": "sk_live_xyz"}
            config = get_config()
            assert config.clerk_secret_key == "sk_live_xyz"
            mock_boto3.client.assert_called_once_with("secretsmanager")


def test_config_is_cached():
    with patch.dict(os.environ, {}, clear=True):
        assert get_config() is get_config()


def test_config_is_immutable():
    with patch.dict(os.environ, {}, clear=True):
        config = get_config()
        with pytest.raises(pydantic.ValidationError):
            config.aws_region = "eu-west-1"  # type: ignore[misc]
