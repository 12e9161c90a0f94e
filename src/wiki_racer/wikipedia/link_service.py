import logging
from typing import List

import httpx
from bs4 import BeautifulSoup

from wiki_racer.utils.wiki_helpers import site_root

# Only links inside body paragraphs count as article links; this skips
# navigation boxes, infoboxes and the sidebar.
ARTICLE_LINK_SELECTOR = 'p a[href^="/wiki/"]'


def extract_links(html: str, page_url: str) -> List[str]:
    """Absolute article URLs linked from the paragraphs of a page, first occurrence first."""
    soup = BeautifulSoup(html, "html.parser")
    base_url = site_root(page_url)
    links = dict.fromkeys(base_url + anchor["href"] for anchor in soup.select(ARTICLE_LINK_SELECTOR))
    return list(links)


class LinkService:
    """
    Fetches Wikipedia pages over HTTP and returns the article links they contain.
    All methods are asynchronous.
    """
    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0):
        self.client = client
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    async def get_links(self, page_url: str) -> List[str]:
        """
        Fetch a page and extract its article links.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses, so callers can retry
        """
        response = await self.client.get(page_url, timeout=self.timeout)
        response.raise_for_status()
        links = extract_links(response.text, page_url)
        self.logger.debug(f"Fetched {len(links)} links from {page_url}")
        return links
