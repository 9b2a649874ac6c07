"""Cloudflare cache management."""
from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from cloudflare_purge.errors import ApiError, InvalidResponse, PurgeError, TransportError
from cloudflare_purge.models.purge import PurgeConfig, PurgeOutcome, PurgeRequest, PurgeResult

__all__ = ["PurgeClient", "cache_purge", "parse_result", "build_request"]

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


def build_request(url: str, config: PurgeConfig) -> httpx.Request:
    """Build the purge request for a single url. Config must be enabled."""
    if config.credentials is None:
        raise ValueError("Purge credentials are not configured")

    headers = {"Content-Type": "application/json", **config.credentials.headers()}
    body = json.dumps(PurgeRequest(url=url).payload(), separators=(",", ":"))
    return httpx.Request(
        str(config.method),
        config.endpoint,
        headers=headers,
        content=body.encode("utf-8"),
        extensions={"timeout": httpx.Timeout(config.timeout).as_dict()},
    )


def parse_result(body: str) -> PurgeResult:
    """
    Parse a purge response envelope.
    Raises InvalidResponse if the body is not a JSON object with a non-null 'success'.
    """
    try:
        data: Any = json.loads(body)
    except ValueError:
        raise InvalidResponse(body) from None

    if not isinstance(data, dict) or data.get("success") is None:
        raise InvalidResponse(body)

    if data["success"]:
        return PurgeResult(success=True)

    messages = []
    errors = data.get("errors")
    if isinstance(errors, list):
        for error in errors:
            if isinstance(error, dict) and error.get("message") is not None:
                messages.append(str(error["message"]))

    return PurgeResult(success=False, error_messages=messages or [UNKNOWN_ERROR])


class PurgeClient:
    """
    Sends cache purge requests for single urls.
    A supplied `http_client` is borrowed and left open by `close()`.
    """

    def __init__(self, config: PurgeConfig, http_client: httpx.Client | None = None):
        self.config = config
        self._http_client = http_client
        self._owns_client = False

    def __enter__(self) -> PurgeClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None
            self._owns_client = False

    def purge(self, url: str) -> PurgeOutcome:
        """Purge a URL from Cloudflare's cache."""
        config = self.config
        if not config.enabled:
            logger.debug("Cloudflare purge not configured, skipping %s", url)
            return PurgeOutcome(url=url, configured=False)

        request = build_request(url, config)
        logger.debug("%s %s files=%r", request.method, request.url, [url])

        try:
            res = self._send(request)
        except httpx.TransportError as e:
            logger.error("Cloudflare purge of %s failed: %s", url, e)
            error = TransportError(f"Could not reach Cloudflare API: {e}")
            error.__cause__ = e
            return PurgeOutcome(url=url, error=error)
        except httpx.DecodingError as e:
            error = InvalidResponse()
            error.__cause__ = e
            return self._failed(url, None, None, error)

        try:
            result = parse_result(res.text)
        except InvalidResponse as e:
            return self._failed(url, res.status_code, None, e)

        if not result.success:
            return self._failed(url, res.status_code, result, ApiError(result.error_messages))

        logger.info("Purged %s (%d)", url, res.status_code)
        return PurgeOutcome(url=url, status_code=res.status_code, result=result)

    def _send(self, request: httpx.Request) -> httpx.Response:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self.config.timeout)
            self._owns_client = True
        return self._http_client.send(request)

    def _failed(
        self, url: str, status_code: int | None, result: PurgeResult | None, error: PurgeError
    ) -> PurgeOutcome:
        # lenient mode swallows what Cloudflare reports
        if not self.config.strict:
            logger.warning("Ignoring failed purge of %s (%s): %s", url, status_code, error)
            error = None
        else:
            logger.error("Purge of %s failed (%s): %s", url, status_code, error)
        return PurgeOutcome(url=url, status_code=status_code, result=result, error=error)


def cache_purge(url: str, config: PurgeConfig, client: httpx.Client | None = None) -> PurgeOutcome:
    """Purge a URL from Cloudflare's cache."""
    with PurgeClient(config, client) as purge_client:
        return purge_client.purge(url)
