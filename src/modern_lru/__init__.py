from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from modern_lru.cache import LRUCache
from modern_lru.config import CacheSpec, LRUConfig, build_caches, load_config
from modern_lru.errors import CacheArgumentError, CacheConfigError, CacheError


def _package_version() -> str:
    try:
        return version("modern-lru")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "CacheArgumentError",
    "CacheConfigError",
    "CacheError",
    "CacheSpec",
    "LRUCache",
    "LRUConfig",
    "__version__",
    "build_caches",
    "load_config",
]
