"""modern_lru exception hierarchy.

Keep this module small and dependency-free: it is imported by every other
module and by tests.
"""


class CacheError(Exception):
    """Base exception for all modern_lru errors."""


class CacheArgumentError(CacheError, ValueError, TypeError):
    """Raised when a cache is constructed with an invalid limit or initial data."""


class CacheConfigError(CacheError):
    """Raised for invalid or missing cache configuration."""
