"""Persistence boundary and store implementations."""

from load_engine.persistence.json_store import JsonFileLoadStore
from load_engine.persistence.memory import InMemoryLoadStore
from load_engine.persistence.store import LoadStore

__all__ = ["InMemoryLoadStore", "JsonFileLoadStore", "LoadStore"]
