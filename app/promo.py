from __future__ import annotations

from dataclasses import dataclass

from app.collaborators import ContextProvider, no_value
from app.storage import StoragePort, promo_key


@dataclass(frozen=True, slots=True)
class PromoContext:
    """Ambient signup context attached to every session request."""

    promo_code: str | None = None
    referrer_id: str | None = None
    sign_up_method: str | None = None


class PromoContextReader:
    """Reads (and, for the promo code, writes) client-side signup context.

    The promo code is stored per host, independent of any farm, and may be set
    by the promo-redemption flow at any time before a session is requested.
    Referrer id and signup method are owned elsewhere; they come in as providers.

    Storage errors propagate: an unreadable store must not look like "no promo".
    """

    def __init__(
        self,
        *,
        storage: StoragePort,
        host: str,
        referrer_provider: ContextProvider = no_value,
        signup_method_provider: ContextProvider = no_value,
    ) -> None:
        self._storage = storage
        self._key = promo_key(host=host)
        self._referrer_provider = referrer_provider
        self._signup_method_provider = signup_method_provider

    def get_promo_code(self) -> str | None:
        # None only when nothing was ever saved; a saved "" comes back as "".
        return self._storage.get(self._key)

    def save_promo_code(self, code: str) -> None:
        self._storage.set(self._key, code)

    def get_referrer_id(self) -> str | None:
        return self._referrer_provider()

    def get_signup_method(self) -> str | None:
        return self._signup_method_provider()

    def collect(self) -> PromoContext:
        return PromoContext(
            promo_code=self.get_promo_code(),
            referrer_id=self.get_referrer_id(),
            sign_up_method=self.get_signup_method(),
        )
