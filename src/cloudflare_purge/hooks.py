"""Page lifecycle hooks that purge the page's url from Cloudflare's cache."""
from __future__ import annotations

import logging
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict

from cloudflare_purge.models.purge import PurgeConfig, PurgeOutcome
from cloudflare_purge.utils import uris
from cloudflare_purge.utils.cf_cache import PurgeClient

logger = logging.getLogger(__name__)


class Page(Protocol):
    @property
    def full_url(self) -> str: ...


class WikiPage(BaseModel):
    """A page identity on a wiki served from `server`."""

    model_config = ConfigDict(frozen=True)

    title: str
    server: str
    article_path: str = "/wiki/$1"

    @property
    def full_url(self) -> str:
        return uris.full_url(self.server, self.title, self.article_path)


class PurgeHooks:
    """
    Handlers for the host platform's page events.
    Failures the client reports as errors are raised to the event pipeline.
    """

    def __init__(self, config: PurgeConfig, http_client: httpx.Client | None = None):
        self.client = PurgeClient(config, http_client)

    def __enter__(self) -> PurgeHooks:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.client.close()

    def on_page_save_complete(self, page: Page) -> PurgeOutcome:
        logger.debug("Page saved: %s", page.full_url)
        return self._purge(page)

    def on_page_delete_complete(self, page: Page) -> PurgeOutcome:
        logger.debug("Page deleted: %s", page.full_url)
        return self._purge(page)

    def _purge(self, page: Page) -> PurgeOutcome:
        return self.client.purge(page.full_url).raise_for_error()
