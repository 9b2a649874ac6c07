"""Configuration"""
from __future__ import annotations

from typing import Optional

import pyperclip
import rich
import typer
from typing_extensions import Annotated

from cloudflare_purge.models.keyring_config import ConfigKey, KeyringConfig
from cloudflare_purge.models.settings import load_settings

app = typer.Typer(no_args_is_help=True)
cp = rich.print


@app.command(name="set")
def set_config(
        key: ConfigKey,
        value: Annotated[Optional[str], typer.Argument()] = None
):
    """Set a keyring value. Omit the value to clear it."""
    with KeyringConfig.load_from_keyring() as config:
        if value is None:
            config.pop(key, None)
        else:
            config[key] = value

    cp(f"{'Cleared' if value is None else 'Saved'} key {repr(key.value)}")


@app.command(name="set-cp")
def set_cp_config(
    key: ConfigKey
):
    """Set a keyring value from clipboard."""
    value = pyperclip.paste()
    if not value:
        cp("❌  Clipboard is empty.")
        raise SystemExit(1)

    with KeyringConfig.load_from_keyring() as config:
        config[key] = value

    cp(f"Saved key {repr(key.value)} from clipboard ({len(value)} chars)")


@app.command()
def show():
    """Show the stored keys and the resolved purge configuration."""
    config = KeyringConfig.load_from_keyring()
    cp(config.to_keys_json())

    purge_config = load_settings().purge_config()
    if not purge_config.enabled:
        cp("[yellow]Purging is disabled:[/yellow] zone id or credentials missing.")
        return

    auth = "bearer token" if purge_config.credentials.kind == "token" else "email + key"
    cp(
        f"Zone {purge_config.zone_id!r}, {auth}, "
        f"{purge_config.method} {'strict' if purge_config.strict else 'lenient'}, "
        f"timeout {purge_config.timeout}s"
    )
