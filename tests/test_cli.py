import httpx
import pytest
from typer.testing import CliRunner

from cloudflare_purge.main import app
from cloudflare_purge.models.keyring_config import ConfigKey, KeyringConfig

from conftest import ENDPOINT, PAGE_URL, ZONE_ID

runner = CliRunner()


@pytest.fixture
def configured(clean_env, monkeypatch):
    monkeypatch.setenv("CF_PURGE_ZONE_ID", ZONE_ID)
    monkeypatch.setenv("CF_PURGE_TOKEN", "cf-token")
    monkeypatch.setenv("CF_PURGE_WIKI_SERVER", "https://example.org")


def test_purge(configured, purge_ok):
    result = runner.invoke(app, ["cf", "purge", PAGE_URL, "https://example.org/wiki/Bar"])

    assert result.exit_code == 0, result.output
    assert "✅" in result.output
    assert purge_ok.call_count == 2


def test_purge_not_configured(clean_env, cf_api):
    result = runner.invoke(app, ["cf", "purge", PAGE_URL])

    assert result.exit_code == 0, result.output
    assert "not configured" in result.output
    assert cf_api.calls.call_count == 0


def test_purge_api_error(configured, cf_api):
    cf_api.post(ENDPOINT).mock(
        return_value=httpx.Response(400, json={"success": False, "errors": [{"message": "bad zone"}]})
    )

    result = runner.invoke(app, ["cf", "purge", PAGE_URL])

    assert result.exit_code == 1
    assert "bad zone" in result.output


def test_purge_lenient(configured, cf_api):
    cf_api.post(ENDPOINT).mock(
        return_value=httpx.Response(400, json={"success": False, "errors": [{"message": "bad zone"}]})
    )

    result = runner.invoke(app, ["cf", "purge", "--lenient", PAGE_URL])

    assert result.exit_code == 0, result.output
    assert "bad zone" in result.output


def test_purge_delete_method(configured, cf_api):
    route = cf_api.delete(ENDPOINT).mock(return_value=httpx.Response(200, json={"success": True}))

    result = runner.invoke(app, ["cf", "purge", "-X", "delete", PAGE_URL])

    assert result.exit_code == 0, result.output
    assert route.call_count == 1


def test_page_saved(configured, purge_ok):
    result = runner.invoke(app, ["cf", "page-saved", "Main Page"])

    assert result.exit_code == 0, result.output
    assert purge_ok.calls.last.request.content == b'{"files":["https://example.org/wiki/Main_Page"]}'


def test_page_deleted_server_option(configured, purge_ok):
    result = runner.invoke(app, ["cf", "page-deleted", "Foo", "--server", "https://wiki.example.net"])

    assert result.exit_code == 0, result.output
    assert purge_ok.calls.last.request.content == b'{"files":["https://wiki.example.net/wiki/Foo"]}'


def test_page_saved_transport_error(configured, cf_api):
    cf_api.post(ENDPOINT).mock(side_effect=httpx.ConnectError)

    result = runner.invoke(app, ["cf", "page-saved", "Foo", "--lenient"])

    assert result.exit_code == 1
    assert "❌  Error:" in result.output


def test_page_saved_without_server(clean_env, cf_api):
    result = runner.invoke(app, ["cf", "page-saved", "Foo"])

    assert result.exit_code == 1
    assert "Wiki server not set" in result.output


def test_config_set_and_clear(clean_env):
    result = runner.invoke(app, ["config", "set", "TOKEN", "kr-token"])

    assert result.exit_code == 0, result.output
    assert KeyringConfig.load_from_keyring()[ConfigKey.TOKEN] == "kr-token"

    result = runner.invoke(app, ["config", "set", "TOKEN"])

    assert result.exit_code == 0, result.output
    assert ConfigKey.TOKEN not in KeyringConfig.load_from_keyring()


def test_config_set_cp(clean_env, monkeypatch):
    monkeypatch.setattr("pyperclip.paste", lambda: "clip-token")

    result = runner.invoke(app, ["config", "set-cp", "AUTH_KEY"])

    assert result.exit_code == 0, result.output
    assert KeyringConfig.load_from_keyring()[ConfigKey.AUTH_KEY] == "clip-token"


def test_config_show(configured):
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert "cf-token" not in result.output
    assert ZONE_ID in result.output
    assert "bearer token" in result.output


def test_config_show_disabled(clean_env):
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert "disabled" in result.output


def test_page_saved_blank_title(configured, cf_api):
    result = runner.invoke(app, ["cf", "page-saved", " "])

    assert result.exit_code == 1
    assert "❌  Error: Page title is empty" in result.output
    assert cf_api.calls.call_count == 0
