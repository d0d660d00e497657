"""Lazy-initialized clients, reused across warm Lambda invocations."""

from functools import lru_cache

from core.config import get_config
from core.db.store import Store, create_store


@lru_cache(maxsize=1)
def get_store() -> Store:
    store = create_store(get_config())
    store.connect()
    return store
