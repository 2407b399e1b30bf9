from __future__ import annotations

import base64
import json
import logging
import time
from collections.abc import Callable

from pydantic import TypeAdapter, ValidationError

from app.api.models import SessionCacheEntry
from app.collaborators import Wallet
from app.storage import StoragePort, session_cache_key


logger = logging.getLogger(__name__)

# farm id -> base64(JSON(SessionCacheEntry))
FarmSessions = dict[str, str]

_FARM_SESSIONS = TypeAdapter(FarmSessions)


def _now_ms() -> int:
    return int(time.time() * 1000)


def encode_entry(entry: SessionCacheEntry) -> str:
    raw = entry.model_dump_json(by_alias=True, exclude_none=True)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_entry(blob: str) -> SessionCacheEntry:
    return SessionCacheEntry.model_validate_json(base64.b64decode(blob, validate=True))


class SessionCache:
    """Advisory per-farm record of sessions started from this client.

    One entry per farm, kept under a single key scoped by host and page path.
    Not a source of truth for session validity; the server is.

    `save_session` is a read-merge-write with no lock: two writers racing on
    different farms can lose one update (last writer wins).
    """

    def __init__(
        self,
        *,
        storage: StoragePort,
        host: str,
        path: str,
        wallet: Wallet,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = storage
        self._key = session_cache_key(host=host, path=path)
        self._wallet = wallet
        self._clock = clock

    def sessions(self) -> FarmSessions:
        """Current mapping; empty if nothing is stored or the stored value is unreadable."""

        item = self._storage.get(self._key)
        if not item:
            return {}
        try:
            return _FARM_SESSIONS.validate_json(item)
        except ValidationError:
            # Corrupt cache must never block starting a new session.
            logger.warning("Discarding unreadable session cache at %s", self._key)
            return {}

    def get_session_id(self) -> str:
        # Joins the encoded entries, not farm ids; consumers rely on this exact string.
        return ":".join(self.sessions().values())

    def save_session(self, farm_id: str | int) -> None:
        """Record a session for `farm_id`, replacing any earlier entry for that farm.

        `load_session` passes the top-level `farmId` string from the session
        response, so entries are keyed and encoded with that string, not the
        numeric id inside the farm snapshot.
        """

        sessions = self.sessions()

        entry = SessionCacheEntry(
            farm_id=farm_id,
            logged_in_at=self._clock(),
            account=self._wallet.my_account,
        )
        sessions[str(farm_id)] = encode_entry(entry)

        self._storage.set(self._key, json.dumps(sessions, separators=(",", ":")))
        logger.debug("Saved session cache entry for farm %s", farm_id)
