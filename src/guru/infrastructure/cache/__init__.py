# Infrastructure Cache Package
from .memory_cache import CacheEntry, InMemoryResultCache

__all__ = ["CacheEntry", "InMemoryResultCache"]
