"""Purge errors."""
from __future__ import annotations


class PurgeError(RuntimeError):
    """Base class for failed cache purges."""


class TransportError(PurgeError):
    """The request never got a response (connection failure, timeout)."""


class InvalidResponse(PurgeError):
    """The response body is not a success/failure envelope."""

    def __init__(self, body: str = ""):
        super().__init__("Invalid response from Cloudflare API")
        self.body = body


class ApiError(PurgeError):
    """Cloudflare reported ``success: false``."""

    def __init__(self, messages: list[str]):
        super().__init__(f"Cloudflare API Error: {', '.join(messages)}")
        self.messages = messages
