from __future__ import annotations

import os

import redis


def get_redis_url() -> str:
    # SESSION_REDIS_URL lets the session store live apart from a shared REDIS_URL.
    return os.environ.get("SESSION_REDIS_URL") or os.environ.get("REDIS_URL", "redis://localhost:6379/0")


def create_redis() -> redis.Redis:
    # decode_responses=True => strings in/out instead of bytes, like browser storage
    return redis.Redis.from_url(get_redis_url(), decode_responses=True)
