from __future__ import annotations

from typing import Protocol

import redis


SESSION_KEY_PREFIX = "sb_wiz.xtc.t."
PROMO_KEY_PREFIX = "sb_wiz.promo-key.v."


class StoragePort(Protocol):
    """Minimal string key-value store, shaped like browser localStorage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class RedisStorage:
    """`StoragePort` backed by redis-py.

    Works with or without `decode_responses=True`; bytes are decoded as UTF-8.
    """

    def __init__(self, r: redis.Redis) -> None:
        self._r = r

    def get(self, key: str) -> str | None:
        raw = self._r.get(key)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return str(raw)

    def set(self, key: str, value: str) -> None:
        self._r.set(key, value)


def normalize_host(host: str) -> str:
    return host.removeprefix("www.")


def session_cache_key(*, host: str, path: str) -> str:
    # Scoped by host and page path: two pages on one host may serve different games.
    return f"{SESSION_KEY_PREFIX}{normalize_host(host)}-{path}"


def promo_key(*, host: str) -> str:
    return f"{PROMO_KEY_PREFIX}{normalize_host(host)}"
