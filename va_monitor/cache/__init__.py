"""In-memory caching for the component table."""

from .manager import CacheManager, ComponentTable

__all__ = ["CacheManager", "ComponentTable"]
