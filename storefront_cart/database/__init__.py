# Storage and catalog

from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage
from .products import ProductCatalog

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "ProductCatalog",
]
