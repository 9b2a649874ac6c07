"""Cloudflare API tools."""
from __future__ import annotations

from typing import Annotated, Callable, Optional, TypeVar, ParamSpec, Any

import typer
from rich import print as cp
from typer import Option

from cloudflare_purge.hooks import PurgeHooks, WikiPage
from cloudflare_purge.models.purge import PurgeConfig, PurgeMethod, PurgeOutcome
from cloudflare_purge.models.settings import EnvSettings, load_settings
from cloudflare_purge.utils.cf_cache import PurgeClient

T = TypeVar("T")
P = ParamSpec("P")

StrictType = Annotated[
    Optional[bool],
    Option("--strict/--lenient", help="Fail on Cloudflare errors, or only log them"),
]
MethodType = Annotated[Optional[PurgeMethod], Option("--method", "-X", case_sensitive=False)]
ServerType = Annotated[Optional[str], Option("--server", help="Wiki server, e.g. https://example.org")]

app = typer.Typer(no_args_is_help=True)


def get_settings(ctx: typer.Context) -> EnvSettings:
    if isinstance(ctx.obj, EnvSettings):
        return ctx.obj
    return load_settings()


def attempt(settings: EnvSettings, func: Callable[P, T], *args: Any) -> T:
    try:
        return func(*args)
    except Exception as e:
        if settings.verbose:
            raise
        else:
            typer.echo(f"❌  Error: {e}")
            raise SystemExit(1)


def build_config(
    settings: EnvSettings, strict: bool | None, method: PurgeMethod | None
) -> PurgeConfig:
    config = settings.purge_config()
    update = {}
    if strict is not None:
        update["strict"] = strict
    if method is not None:
        update["method"] = method
    return config.model_copy(update=update)


def report(outcome: PurgeOutcome):
    if not outcome.configured:
        typer.echo(f"⏭️  Cloudflare purge is not configured, skipped {outcome.url!r}")
    elif outcome.ok:
        typer.echo(f"✅  {outcome.url} ({outcome.status_code})")
        if outcome.result is not None and not outcome.result.success:
            cp(f"[yellow]Ignored:[/yellow] {', '.join(outcome.result.error_messages)}")


@app.command()
def purge(
    ctx: typer.Context,
    url: Annotated[list[str], typer.Argument(help="Full urls to purge")],
    strict: StrictType = None,
    method: MethodType = None,
):
    """Purge URLs from Cloudflare's cache, one request each."""
    settings = get_settings(ctx)
    config = build_config(settings, strict, method)

    failed = 0
    with PurgeClient(config) as client:
        for target in url:
            typer.echo(f"Purging {target!r} from Cloudflare's cache...")
            outcome = client.purge(target)
            if outcome.ok:
                report(outcome)
            else:
                failed += 1
                typer.echo(f"❌  {outcome.error}")
                if settings.verbose:
                    outcome.raise_for_error()

    if failed:
        raise SystemExit(1)


def page_event(ctx: typer.Context, title: str, server: str | None, deleted: bool, strict, method):
    settings = get_settings(ctx)
    server = server or settings.wiki_server
    if not server:
        typer.echo("❌  Wiki server not set. Pass --server or set CF_PURGE_WIKI_SERVER.")
        raise SystemExit(1)

    page = WikiPage(title=title, server=server, article_path=settings.article_path)

    def run() -> PurgeOutcome:
        typer.echo(f"Purging {page.full_url!r} from Cloudflare's cache...")
        with PurgeHooks(build_config(settings, strict, method)) as hooks:
            handler = hooks.on_page_delete_complete if deleted else hooks.on_page_save_complete
            return handler(page)

    report(attempt(settings, run))


@app.command()
def page_saved(
    ctx: typer.Context,
    title: str,
    server: ServerType = None,
    strict: StrictType = None,
    method: MethodType = None,
):
    """Run the page save hook for a page title."""
    page_event(ctx, title, server, False, strict, method)


@app.command()
def page_deleted(
    ctx: typer.Context,
    title: str,
    server: ServerType = None,
    strict: StrictType = None,
    method: MethodType = None,
):
    """Run the page delete hook for a page title."""
    page_event(ctx, title, server, True, strict, method)
