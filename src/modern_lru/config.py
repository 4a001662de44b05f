"""Named cache configuration loaded from ``lru.toml``.

This module only reads the file and validates it; caches are created by
:func:`build_caches`. Example::

    version = 1

    [defaults]
    limit = 128

    [caches.sessions]
    limit = 1024

    [caches.templates]
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from modern_lru.cache import LRUCache
from modern_lru.errors import CacheConfigError

logger = logging.getLogger("modern_lru.config")

CONFIG_FILENAME = "lru.toml"
DEFAULT_LIMIT = 128


@dataclass(frozen=True)
class CacheSpec:
    name: str
    limit: int


@dataclass(frozen=True)
class LRUConfig:
    version: int
    default_limit: int
    caches: dict[str, CacheSpec]


def find_config_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `lru.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise CacheConfigError(f"Could not find {CONFIG_FILENAME} by walking upward from start path.")


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CacheConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise CacheConfigError(f"Expected {name} to be an integer.")
    return value


def _as_limit(value: Any, *, name: str) -> int:
    limit = _as_int(value, name=name)
    if limit < 1:
        raise CacheConfigError(f"Invalid config: {name} must be >= 1.")
    return limit


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> LRUConfig:
    """Load and validate `lru.toml`.

    If neither `root` nor `config_path` are provided, the file is discovered by
    walking upward from the current working directory.
    """

    if config_path is None:
        if root is None:
            root = find_config_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise CacheConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise CacheConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CacheConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise CacheConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise CacheConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise CacheConfigError(f"Unsupported config version: {version_i} (expected 1).")

    defaults_tbl = _as_table(data.get("defaults"), name="defaults")
    caches_tbl = _as_table(data.get("caches"), name="caches")

    if "limit" in defaults_tbl:
        default_limit = _as_limit(defaults_tbl["limit"], name="defaults.limit")
    else:
        default_limit = DEFAULT_LIMIT

    caches: dict[str, CacheSpec] = {}
    for name, value in caches_tbl.items():
        tbl = _as_table(value, name=f"caches.{name}")
        if "limit" in tbl:
            limit = _as_limit(tbl["limit"], name=f"caches.{name}.limit")
        else:
            limit = default_limit
        caches[name] = CacheSpec(name=name, limit=limit)

    return LRUConfig(version=version_i, default_limit=default_limit, caches=caches)


def build_caches(config: LRUConfig) -> dict[str, LRUCache[Any, Any]]:
    """Create one empty cache per configured entry, keyed by name."""

    out: dict[str, LRUCache[Any, Any]] = {}
    for name, spec in config.caches.items():
        out[name] = LRUCache(spec.limit)
        logger.debug("Built cache %r (limit=%d)", name, spec.limit)
    return out
