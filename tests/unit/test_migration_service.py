import json
import os
from unittest.mock import patch

import pytest

from core.services.migration import _load_credentials_from_secret, run_migrations


@patch("core.services.migration.command")
@patch("core.services.migration._load_credentials_from_secret")
def test_run_migrations_success(mock_creds, mock_command):
    with patch.dict("os.environ", {"DATABASE_SECRET_ARN": ""}):
        with patch("core.services.migration.Config"):
            result = run_migrations()
            assert result["status"] == "success"
            mock_creds.assert_not_called()
            assert mock_command.upgrade.call_args.args[1] == "head"


@patch("core.services.migration.command")
@patch("core.services.migration._load_credentials_from_secret")
def test_run_migrations_loads_secret_when_configured(mock_creds, mock_command):
    with patch.dict("os.environ", {"DATABASE_SECRET_ARN": "arn:aws:secretsmanager:db"}):
        with patch("core.services.migration.Config"):
            run_migrations()
    mock_creds.assert_called_once_with("arn:aws:secretsmanager:db")


@patch("core.services.migration.command")
def test_run_migrations_script_location_next_to_ini(mock_command):
    with patch.dict("os.environ", {"DATABASE_SECRET_ARN": "", "ALEMBIC_CONFIG": "/opt/app/alembic.ini"}):
        with patch("core.services.migration.Config") as mock_config:
            run_migrations()
    mock_config.assert_called_once_with("/opt/app/alembic.ini")
    mock_config.return_value.set_main_option.assert_called_once_with(
        "script_location", os.path.join("/opt/app", "alembic")
    )


@patch("core.services.migration.command")
def test_run_migrations_raises_on_failure(mock_command):
    mock_command.upgrade.side_effect = Exception("connection refused")
    with patch.dict("os.environ", {"DATABASE_SECRET_ARN": ""}):
        with patch("core.services.migration.Config"):
            with pytest.raises(Exception, match="connection refused"):
                run_migrations()


def test_load_credentials_sets_postgres_env():
    secret = {"username": "admin", "password": "s3cret", "host": "db.internal", "port": 6543, "dbname": "tigo"}
    with patch.dict("os.environ", {}, clear=True):
        with patch("core.services.migration.boto3") as mock_boto3:
            mock_boto3.client.return_value.get_secret_value.return_value = {"SecretString": json.dumps(secret)}
            _load_credentials_from_secret("arn:aws:secretsmanager:db")
            assert os.environ["POSTGRES_USER"] == "admin"
            assert os.environ["POSTGRES_PASSWORD"] == "s3cret"
            assert os.environ["POSTGRES_HOST"] == "db.internal"
            assert os.environ["POSTGRES_PORT"] == "6543"
            assert os.environ["POSTGRES_DATABASE"] == "tigo"
