"""Storage-side structures owned by the engine: catalog, category index, result cache."""
from .cache import ResultCache
from .index import CategoryIndex
from .memory_store import MemoryStore

__all__ = ["ResultCache", "CategoryIndex", "MemoryStore"]
