from __future__ import annotations

import logging

import httpx
import redis
from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_config, get_http_client, get_redis
from app.api.models import (
    PromoCodeBody,
    PromoCodeResponse,
    SessionBootstrapBody,
    SessionIdResponse,
    SessionRequest,
    SessionResult,
)
from app.collaborators import StaticWallet
from app.config import ClientConfig
from app.errors import (
    InvalidResponseError,
    MaintenanceError,
    RateLimitError,
    SessionBootstrapError,
    SessionExpiredError,
    SessionServerError,
    TransportError,
)
from app.promo import PromoContextReader
from app.session_cache import SessionCache
from app.session_client import SessionBootstrapClient
from app.storage import RedisStorage


logger = logging.getLogger(__name__)

router = APIRouter()


# How each bootstrap failure is reported to the local UI.
ERROR_STATUS: dict[type[SessionBootstrapError], int] = {
    MaintenanceError: status.HTTP_503_SERVICE_UNAVAILABLE,
    RateLimitError: status.HTTP_429_TOO_MANY_REQUESTS,
    SessionExpiredError: status.HTTP_401_UNAUTHORIZED,
    SessionServerError: status.HTTP_502_BAD_GATEWAY,
    InvalidResponseError: status.HTTP_502_BAD_GATEWAY,
    TransportError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def _promo_reader(*, r: redis.Redis, config: ClientConfig, body: SessionBootstrapBody | None = None) -> PromoContextReader:
    referrer_id = body.referrer_id if body else None
    sign_up_method = body.sign_up_method if body else None
    return PromoContextReader(
        storage=RedisStorage(r),
        host=config.host,
        referrer_provider=lambda: referrer_id,
        signup_method_provider=lambda: sign_up_method,
    )


def _session_cache(*, r: redis.Redis, config: ClientConfig, account: str | None = None) -> SessionCache:
    return SessionCache(
        storage=RedisStorage(r),
        host=config.host,
        path=config.path,
        wallet=StaticWallet(my_account=account),
    )


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/session", response_model=SessionResult)
async def load_session_route(
    payload: SessionBootstrapBody,
    r: redis.Redis = Depends(get_redis),
    config: ClientConfig = Depends(get_config),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> SessionResult:
    client = SessionBootstrapClient(
        config=config,
        http=http,
        promo=_promo_reader(r=r, config=config, body=payload),
        # The wallet that signed in is the active account for this session.
        cache=_session_cache(r=r, config=config, account=payload.wallet),
    )
    request = SessionRequest(token=payload.token, transaction_id=payload.transaction_id, wallet=payload.wallet)

    try:
        return await client.load_session(request)
    except SessionBootstrapError as e:
        raise HTTPException(status_code=ERROR_STATUS[type(e)], detail=e.code) from e


@router.get("/session/id", response_model=SessionIdResponse)
async def session_id_route(
    r: redis.Redis = Depends(get_redis),
    config: ClientConfig = Depends(get_config),
) -> SessionIdResponse:
    return SessionIdResponse(session_id=_session_cache(r=r, config=config).get_session_id())


@router.get("/promo", response_model=PromoCodeResponse)
async def get_promo_route(
    r: redis.Redis = Depends(get_redis),
    config: ClientConfig = Depends(get_config),
) -> PromoCodeResponse:
    return PromoCodeResponse(promo_code=_promo_reader(r=r, config=config).get_promo_code())


@router.put("/promo", status_code=status.HTTP_204_NO_CONTENT)
async def save_promo_route(
    payload: PromoCodeBody,
    r: redis.Redis = Depends(get_redis),
    config: ClientConfig = Depends(get_config),
) -> Response:
    _promo_reader(r=r, config=config).save_promo_code(payload.promo_code)
    logger.info("Stored promo code for %s", config.host)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
