"""Uri helpers"""
from urllib import parse

__all__ = ["full_url", "title_to_path"]

# characters left alone when encoding page titles into paths
TITLE_SAFE_CHARS = ";:@$!*(),/~"


def title_to_path(title: str) -> str:
    """Encode a page title the way it appears in article urls."""
    db_key = title.strip().replace(" ", "_")
    return parse.quote(db_key, safe=TITLE_SAFE_CHARS)


def full_url(server: str, title: str, article_path: str = "/wiki/$1") -> str:
    """
    Canonical, fully-qualified url of a page.
    `article_path` is a path template where '$1' is replaced by the encoded title.
    """
    if not title.strip():
        raise ValueError("Page title is empty")

    path = article_path.replace("$1", title_to_path(title))
    return server.rstrip("/") + "/" + path.lstrip("/")
