"""Errors raised by the hub client."""


class HubClientError(Exception):
    """Base class for hub client failures."""


class TransportError(HubClientError):
    """The request failed or the response could not be interpreted as HTTP."""


class AuthorizationRequired(HubClientError):
    """The hub answered with a 4xx status.

    The hub reports private or gated repositories as 401/404, so every client
    error is treated as an authorization problem.
    """

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Authorization required ({status_code}): {url}")
        self.status_code = status_code
        self.url = url


class HttpStatusError(HubClientError):
    """Any other unexpected HTTP status."""

    def __init__(self, status_code: int, url: str | None = None):
        message = f"Unexpected HTTP status {status_code}"
        if url:
            message += f": {url}"
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ParseError(HubClientError):
    """A hub response body could not be decoded."""
