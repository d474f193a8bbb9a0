from functools import lru_cache
from typing import Optional

from taskboard.stores.base import TaskStore
from taskboard.stores.document import DocumentStore
from taskboard.stores.relational import RelationalStore


def select_store(database_url: Optional[str], data_path: str) -> TaskStore:
    """A configured connection string means Postgres-style rows, otherwise the JSON file."""
    if database_url:
        return RelationalStore(database_url)
    return DocumentStore(data_path)


@lru_cache(maxsize=None)
def active_backend() -> TaskStore:
    """The store for this process, chosen once from configuration."""
    import taskboard.config as _cfg
    return select_store(_cfg.DATABASE_URL, _cfg.DATA_PATH)
