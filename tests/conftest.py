from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import fakeredis
import httpx
import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    In CI, we *don't* auto-load `.env` by default so tests stay hermetic.
    Opt-in locally with: SESSION_BOOTSTRAP_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("SESSION_BOOTSTRAP_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def session_body() -> dict[str, Any]:
    """A well-formed 2xx body from the session endpoint."""

    return {
        "farm": {"id": 42, "balance": "12.5", "inventory": {"Sunflower Seed": "5"}},
        "startedAt": "2024-01-01T00:00:00.000Z",
        "isBlacklisted": False,
        "deviceTrackerId": "dt-123",
        "announcements": [{"id": "a1", "headline": "Welcome back"}],
        "transaction": {"type": "withdraw_bumpkin", "expiresAt": 1700000000000},
        "verified": True,
        "moderation": {"muted": [], "kicked": []},
        "promoCode": "SPRING",
        "sessionId": "sess-1",
        "farmId": "42",
        "analyticsId": "an-1",
        "farmAddress": "0xFARM",
    }


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis, dict[str, Handler]], None, None]:
    """FastAPI TestClient wired to fakeredis and a mocked upstream session endpoint.

    Tests set `upstream["handler"]` to control what the session endpoint returns.
    """

    from collections.abc import AsyncGenerator

    from app.api.deps import get_config, get_http_client, get_redis
    from app.config import ClientConfig
    from app.main import app

    r = fakeredis.FakeRedis(decode_responses=True)
    upstream: dict[str, Handler] = {"handler": lambda request: httpx.Response(500)}

    def _override_redis() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    def _override_config() -> ClientConfig:
        return ClientConfig(api_url="https://api.test", client_version="2024-01-01T00:00", host="www.farm.test", path="/play/")

    async def _override_http() -> AsyncGenerator[httpx.AsyncClient, None]:
        transport = httpx.MockTransport(lambda request: upstream["handler"](request))
        async with httpx.AsyncClient(transport=transport) as client:
            yield client

    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_config] = _override_config
    app.dependency_overrides[get_http_client] = _override_http
    with TestClient(app) as c:
        yield c, r, upstream
    app.dependency_overrides.clear()
