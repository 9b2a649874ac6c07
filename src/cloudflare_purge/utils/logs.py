import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False):
    """Route library logs through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=verbose, show_path=verbose)],
        force=True,
    )
    # request lines are already logged by the purge client
    logging.getLogger("httpx").setLevel(logging.WARNING)
