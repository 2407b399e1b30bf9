from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WireModel(BaseModel):
    """Inbound server payloads: camelCase keys only."""

    model_config = ConfigDict(alias_generator=to_camel)


class SessionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Opaque bearer credential; never logged.
    token: str = Field(..., min_length=1)
    # Client-generated correlation id. Callers retrying must generate a fresh one.
    transaction_id: str = Field(..., min_length=1)
    wallet: str = Field(..., min_length=1)


class SessionRequestBody(CamelModel):
    """JSON body POSTed to the session endpoint."""

    client_version: str
    wallet: str
    promo_code: str | None = None
    referrer_id: str | None = None
    sign_up_method: str | None = None


# Server notices shown at session start; content is owned by the UI.
Announcement = dict[str, Any]


class PendingTransaction(WireModel):
    type: Literal["withdraw_bumpkin"]
    expires_at: int | float


class SessionPayload(WireModel):
    """Validated 2xx body of the session endpoint.

    Decoded strictly: `"verified": "yes"` is a shape violation, not a truthy string.
    """

    # Raw farm snapshot; handed untouched to the game-state transform.
    farm: dict[str, Any]
    started_at: str
    is_blacklisted: bool | None = None
    device_tracker_id: str
    status: Literal["COOL_DOWN"] | None = None
    announcements: list[Announcement]
    transaction: PendingTransaction | None = None
    verified: bool
    moderation: dict[str, Any]
    promo_code: str | None = None
    session_id: str
    farm_id: str
    analytics_id: str
    # Only present once the farm has been minted on-chain.
    farm_address: str | None = None


class SessionResult(BaseModel):
    farm_id: str
    farm_address: str | None = None
    game: Any
    is_blacklisted: bool | None = None
    device_tracker_id: str
    announcements: list[Announcement] = Field(default_factory=list)
    transaction: PendingTransaction | None = None
    verified: bool
    promo_code: str | None = None
    moderation: dict[str, Any] = Field(default_factory=dict)
    session_id: str
    analytics_id: str


class SessionCacheEntry(CamelModel):
    farm_id: str | int
    # Milliseconds since the epoch.
    logged_in_at: int
    # Wallet account active when the session was saved; absent if no wallet connected.
    account: str | None = None


class SessionBootstrapBody(BaseModel):
    token: str = Field(..., min_length=1)
    transaction_id: str = Field(..., min_length=1)
    wallet: str = Field(..., min_length=1)

    # Ambient signup context normally read from the page (referral link, signup button).
    referrer_id: str | None = None
    sign_up_method: str | None = None


class SessionIdResponse(BaseModel):
    session_id: str


class PromoCodeBody(BaseModel):
    promo_code: str = Field(..., min_length=1, max_length=256)


class PromoCodeResponse(BaseModel):
    promo_code: str | None = None
