import httpx
import pytest
import respx

from cloudflare_purge.models.keyring_config import KeyringConfig
from cloudflare_purge.models.purge import PurgeConfig

ZONE_ID = "023e105f4ecef8ad9ca31a8372d0c353"
ENDPOINT = f"https://api.cloudflare.com/client/v4/zones/{ZONE_ID}/purge_cache"
PAGE_URL = "https://example.org/wiki/Foo"


@pytest.fixture
def cf_api():
    """Cloudflare API mock; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def purge_ok(cf_api):
    return cf_api.post(ENDPOINT).mock(
        return_value=httpx.Response(200, json={"success": True, "errors": [], "result": {"id": ZONE_ID}})
    )


@pytest.fixture
def token_config() -> PurgeConfig:
    return PurgeConfig.from_values(zone_id=ZONE_ID, bearer_token="cf-token")


@pytest.fixture
def key_config() -> PurgeConfig:
    return PurgeConfig.from_values(zone_id=ZONE_ID, auth_email="admin@example.org", auth_key="cf-key")


@pytest.fixture
def clean_env(monkeypatch):
    """No CF_PURGE_* variables and an in-memory keyring."""
    for name in (
        "ZONE_ID", "TOKEN", "AUTH_EMAIL", "AUTH_KEY", "STRICT", "METHOD",
        "TIMEOUT", "WIKI_SERVER", "ARTICLE_PATH", "VERBOSE",
    ):
        monkeypatch.delenv(f"CF_PURGE_{name}", raising=False)

    store: dict[tuple[str, str], str] = {}
    monkeypatch.setattr("keyring.get_password", lambda service, user: store.get((service, user)))
    monkeypatch.setattr(
        "keyring.set_password", lambda service, user, value: store.__setitem__((service, user), value)
    )
    return store


@pytest.fixture
def keyring_store(clean_env):
    def fill(**values: str):
        with KeyringConfig.load_from_keyring() as config:
            config.update(values)

    return fill
