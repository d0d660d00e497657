"""Relational store: one capability contract, two backends.

``SqliteStore`` is the in-process, file-backed variant used for local
development and tests. ``PostgresStore`` is the client/server variant used
when deployed. Services only ever see ``Store.session()``.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import boto3
from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.engine import URL
from sqlalchemy.orm import Session, sessionmaker

from core.config import Config
from core.db.schemas.base import Base
from core.errors import StoreError

logger = logging.getLogger(__name__)


class Store(ABC):
    def __init__(self, config: Config) -> None:
        self._config = config
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    backend: str

    @abstractmethod
    def url(self) -> URL | str: ...

    @abstractmethod
    def _build_engine(self) -> Engine: ...

    def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = self._build_engine()
        self._sessionmaker = sessionmaker(bind=self._engine, expire_on_commit=False)

    def disconnect(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    def _require_engine(self) -> Engine:
        """Return the active engine or raise if not connected."""
        if self._engine is None:
            raise StoreError(f"{type(self).__name__} is not connected. Call connect() first.")
        return self._engine

    @property
    def config(self) -> Config:
        return self._config

    @property
    def engine(self) -> Engine:
        return self._require_engine()

    def create_schema(self) -> None:
        """Create every table that does not exist yet."""
        Base.metadata.create_all(self._require_engine())

    def drop_schema(self) -> None:
        Base.metadata.drop_all(self._require_engine())

    def health_check(self) -> bool:
        try:
            with self._require_engine().connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session; roll back on any exception, always close.

        Callers commit explicitly so a single operation decides its own
        transaction boundary.
        """
        self._require_engine()
        assert self._sessionmaker is not None
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def __enter__(self) -> "Store":
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        self.disconnect()


class SqliteStore(Store):
    backend = "sqlite"

    def __init__(self, config: Config, path: str | None = None) -> None:
        super().__init__(config)
        self._path = path or config.sqlite_path

    def url(self) -> str:
        return f"sqlite:///{self._path}"

    def _build_engine(self) -> Engine:
        engine = create_engine(
            self.url(),
            connect_args={"check_same_thread": False, "timeout": 30},
        )

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
            # Hand transaction control to SQLAlchemy so BEGIN IMMEDIATE below is honoured.
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn: Any) -> None:
            # Take the write lock up front; concurrent writers queue on the busy timeout.
            conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine


class PostgresStore(Store):
    backend = "postgres"

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._secret_cache: dict[str, str] | None = None

    def _get_credentials(self) -> dict[str, str]:
        if self._config.database_secret_arn:
            if self._secret_cache is None:
                client = boto3.client("secretsmanager", region_name=self._config.aws_region)
                secret = client.get_secret_value(SecretId=self._config.database_secret_arn)
                self._secret_cache = json.loads(secret["SecretString"])
            return self._secret_cache
        return {
            "host": self._config.postgres_host,
            "port": str(self._config.postgres_port),
            "dbname": self._config.postgres_database,
            "user": self._config.postgres_user,
            "password": self._config.postgres_password,
        }

    def url(self) -> URL | str:
        if self._config.database_url:
            return _psycopg_url(self._config.database_url)
        creds = self._get_credentials()
        return URL.create(
            "postgresql+psycopg",
            username=creds.get("username", creds.get("user", self._config.postgres_user)),
            password=creds.get("password", self._config.postgres_password),
            host=creds.get("host", self._config.postgres_host),
            port=int(creds.get("port", self._config.postgres_port)),
            database=creds.get("dbname", self._config.postgres_database),
        )

    def _build_engine(self) -> Engine:
        return create_engine(self.url(), pool_pre_ping=True)


def _psycopg_url(url: str) -> str:
    """Point bare ``postgres://`` / ``postgresql://`` URLs at the psycopg 3 driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def create_store(config: Config) -> Store:
    if config.database_backend == "postgres":
        logger.info("Using PostgreSQL store")
        return PostgresStore(config)
    logger.info("Using SQLite store at %s", config.sqlite_path)
    return SqliteStore(config)
