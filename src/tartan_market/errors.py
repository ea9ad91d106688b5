"""Domain errors raised by services and rendered by the API boundary.

Each error carries the HTTP status and the short client-facing message.
Anything that is not a MarketError is treated as internal and never shown
to the client.
"""


class MarketError(Exception):
    """Base error with an HTTP status code and a client-safe message."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(MarketError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(MarketError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(MarketError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(MarketError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(MarketError):
    """An external service (identity provider, storage) call failed."""

    status_code = 502
    default_message = "Upstream service error"


__all__ = [
    "BadRequestError",
    "ForbiddenError",
    "MarketError",
    "NotFoundError",
    "UnauthorizedError",
    "UpstreamError",
]
