from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import httpx
import redis

from app.config import ClientConfig, load_config
from app.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_config() -> ClientConfig:
    return load_config()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client
