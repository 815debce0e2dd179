"""Word-space stores - read-only, pluggable storage."""

# Import base and factory first (defines registry and decorator)
from wordspace.store.base import BaseWordSpaceStore, validate_query
from wordspace.store.factory import (
    WordSpaceStoreFactory,
    register_store,
    get_registered_stores,
    open_store,
)

# Import stores to trigger registration
from wordspace.store.memory_store import InMemoryWordSpaceStore
from wordspace.store.jsonl_store import JsonlWordSpaceStore

__all__ = [
    "BaseWordSpaceStore",
    "validate_query",
    "WordSpaceStoreFactory",
    "register_store",
    "get_registered_stores",
    "open_store",
    "InMemoryWordSpaceStore",
    "JsonlWordSpaceStore",
]
