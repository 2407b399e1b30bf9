from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from app.api.models import SessionPayload, SessionRequest, SessionRequestBody, SessionResult
from app.collaborators import MakeGame, snapshot_game
from app.config import ClientConfig
from app.errors import InvalidResponseError, TransportError, error_for_status
from app.promo import PromoContextReader
from app.session_cache import SessionCache


logger = logging.getLogger(__name__)


def build_headers(request: SessionRequest) -> dict[str, str]:
    return {
        "content-type": "application/json;charset=UTF-8",
        "Authorization": f"Bearer {request.token}",
        "accept": "application/json",
        "X-Transaction-ID": request.transaction_id,
    }


def decode_session_payload(body: bytes | str) -> SessionPayload | InvalidResponseError:
    """Schema-checked decode of a 2xx session body.

    Returns the payload, or the error to raise; never a partially trusted value.
    """

    try:
        return SessionPayload.model_validate_json(body, strict=True)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "<body>" for err in e.errors()})
        return InvalidResponseError(f"Invalid session response: {', '.join(fields)}")


def to_result(payload: SessionPayload, *, make_game: MakeGame) -> SessionResult:
    return SessionResult(
        farm_id=payload.farm_id,
        farm_address=payload.farm_address,
        game=make_game(payload.farm),
        is_blacklisted=payload.is_blacklisted,
        device_tracker_id=payload.device_tracker_id,
        announcements=payload.announcements,
        transaction=payload.transaction,
        verified=payload.verified,
        promo_code=payload.promo_code,
        moderation=payload.moderation,
        session_id=payload.session_id,
        analytics_id=payload.analytics_id,
    )


class SessionBootstrapClient:
    """Exchanges a bearer token for a validated farm session.

    One request per call, no retries. The cache write is the last step and only
    happens after the body validated, so a cancelled or failed call leaves the
    cache untouched.
    """

    def __init__(
        self,
        *,
        config: ClientConfig,
        http: httpx.AsyncClient,
        promo: PromoContextReader,
        cache: SessionCache,
        make_game: MakeGame = snapshot_game,
    ) -> None:
        self._config = config
        self._http = http
        self._promo = promo
        self._cache = cache
        self._make_game = make_game

    async def load_session(self, request: SessionRequest) -> SessionResult:
        context = self._promo.collect()

        body = SessionRequestBody(
            client_version=self._config.client_version,
            wallet=request.wallet,
            promo_code=context.promo_code,
            referrer_id=context.referrer_id,
            sign_up_method=context.sign_up_method,
        )

        try:
            response = await self._http.post(
                self._config.session_url,
                headers=build_headers(request),
                content=body.model_dump_json(by_alias=True, exclude_none=True),
                timeout=self._config.http_timeout_s,
            )
        except httpx.TransportError as e:
            logger.warning("Session request %s failed before a response: %s", request.transaction_id, e)
            raise TransportError(str(e) or type(e).__name__) from e

        # Status first: error bodies are never run through the payload decoder.
        error = error_for_status(response.status_code)
        if error is not None:
            logger.info(
                "Session request %s rejected with HTTP %s (%s)",
                request.transaction_id,
                response.status_code,
                error.code,
            )
            raise error

        decoded = decode_session_payload(response.content)
        if isinstance(decoded, InvalidResponseError):
            logger.error("Session request %s returned a malformed body: %s", request.transaction_id, decoded)
            raise decoded

        result = to_result(decoded, make_game=self._make_game)

        self._cache.save_session(decoded.farm_id)
        return result
