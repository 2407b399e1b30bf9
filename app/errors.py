from __future__ import annotations


class SessionBootstrapError(Exception):
    """Base class for every failure surfaced by `load_session`.

    `code` is stable and meant for the UI to pick its messaging from.
    """

    code: str = "SESSION_BOOTSTRAP_ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class MaintenanceError(SessionBootstrapError):
    code = "MAINTENANCE"


class RateLimitError(SessionBootstrapError):
    code = "TOO_MANY_REQUESTS"


class SessionExpiredError(SessionBootstrapError):
    code = "SESSION_EXPIRED"


class SessionServerError(SessionBootstrapError):
    code = "SESSION_SERVER_ERROR"

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"{self.code} (HTTP {status_code})")


class InvalidResponseError(SessionBootstrapError):
    """A 2xx body that doesn't match the session payload shape."""

    code = "INVALID_RESPONSE"


class TransportError(SessionBootstrapError):
    """The request failed before any HTTP status was obtained.

    The server may never have seen it, so a retry (with a fresh transaction id) is reasonable.
    """

    code = "TRANSPORT_ERROR"


# Status codes with a dedicated error kind; anything else >= 400 is a generic server error.
STATUS_ERRORS: dict[int, type[SessionBootstrapError]] = {
    503: MaintenanceError,
    429: RateLimitError,
    401: SessionExpiredError,
}


def error_for_status(status_code: int) -> SessionBootstrapError | None:
    """Classify an HTTP status. Returns None when the response may be parsed."""

    cls = STATUS_ERRORS.get(status_code)
    if cls is not None:
        return cls()
    if status_code >= 400:
        return SessionServerError(status_code)
    return None
