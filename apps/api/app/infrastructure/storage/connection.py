import os
from typing import Optional

from app.infrastructure.storage.shard_store import JsonShardStore, ShardStore


USERS_DATA_DIR = os.environ.get("USERS_DATA_DIR", os.path.join(os.getcwd(), "data"))

store: Optional[ShardStore] = None


def init_store() -> None:
    global store
    if store is not None:
        return
    store = JsonShardStore(USERS_DATA_DIR)


def set_store(new_store: Optional[ShardStore]) -> None:
    global store
    store = new_store


def close_store() -> None:
    global store
    store = None


def get_store() -> ShardStore:
    if store is None:
        raise RuntimeError("User store is not initialized")
    return store
