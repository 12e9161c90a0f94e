"""
Helper functions for working with Wikipedia article URLs.
"""
from typing import Optional
from urllib.parse import urlparse

WIKI_PATH_PREFIX = "/wiki/"
WIKIPEDIA_DOMAIN = ".wikipedia.org"


def is_article_url(page_url: str) -> bool:
    """Returns True for http(s) URLs of the form https://<lang>.wikipedia.org/wiki/<Title>."""
    parsed = urlparse(page_url)
    return (
        parsed.scheme in ("http", "https")
        and (parsed.hostname or "").endswith(WIKIPEDIA_DOMAIN)
        and parsed.path.startswith(WIKI_PATH_PREFIX)
        and len(parsed.path) > len(WIKI_PATH_PREFIX)
    )


def language_of(page_url: str) -> Optional[str]:
    """Returns the language edition of an article URL.

    Examples:
      "https://en.wikipedia.org/wiki/Python"     =>   "en"
      "https://de.m.wikipedia.org/wiki/Python"   =>   "de"
      "https://example.com/wiki/Python"          =>   None
    """
    if not is_article_url(page_url):
        return None
    hostname = urlparse(page_url).hostname or ""
    subdomain = hostname[: -len(WIKIPEDIA_DOMAIN)]
    return subdomain.split(".")[0] or None


def site_root(page_url: str) -> str:
    """Returns everything before the /wiki/ path, e.g. "https://en.wikipedia.org"."""
    index = page_url.find(WIKI_PATH_PREFIX)
    if index == -1:
        raise ValueError(f"Not a Wikipedia article URL: {page_url}")
    return page_url[:index]


def article_url(page_url: str, title: str) -> str:
    """Builds the article URL for a displayed title on the same site as page_url.

    Examples:
      ("https://en.wikipedia.org/wiki/USA", "United States")
          =>   "https://en.wikipedia.org/wiki/United_States"
    """
    return f"{site_root(page_url)}{WIKI_PATH_PREFIX}{title.strip().replace(' ', '_')}"
