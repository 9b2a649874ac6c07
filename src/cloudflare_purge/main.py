from cloudflare_purge import cf, config
from cloudflare_purge.models.settings import load_settings
from cloudflare_purge.utils.logs import setup_logging
from typing_extensions import Annotated
import typer

app = typer.Typer(no_args_is_help=True)
app.add_typer(cf.app, name="cf")
app.add_typer(config.app, name="config")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logs, raise errors")] = False,
):
    """Purge wiki pages from Cloudflare's cache."""
    settings = load_settings()
    if verbose:
        settings = settings.model_copy(update={"verbose": True})
    setup_logging(settings.verbose)
    ctx.obj = settings
