from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Static client configuration consumed by the session bootstrap."""

    model_config = ConfigDict(frozen=True)

    api_url: str = "http://localhost:8080"
    client_version: str = "0.0.0"

    # Page location the client is served from; scopes the persisted cache.
    host: str = "localhost"
    path: str = "/"

    http_timeout_s: float = Field(default=10.0, gt=0)

    @property
    def session_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/session"


def load_config(*, env_path: Path | None = None) -> ClientConfig:
    """Build a `ClientConfig` from the environment.

    If `env_path` points at an existing dotenv file it is loaded first, without
    overriding variables that are already set.
    """

    if env_path is not None and env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)

    defaults = ClientConfig()
    return ClientConfig(
        api_url=os.environ.get("SESSION_API_URL", defaults.api_url),
        client_version=os.environ.get("SESSION_CLIENT_VERSION", defaults.client_version),
        host=os.environ.get("SESSION_CLIENT_HOST", defaults.host),
        path=os.environ.get("SESSION_CLIENT_PATH", defaults.path),
        http_timeout_s=float(os.environ.get("SESSION_HTTP_TIMEOUT", defaults.http_timeout_s)),
    )
