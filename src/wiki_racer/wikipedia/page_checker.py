import logging
from typing import Dict

import httpx
from bs4 import BeautifulSoup

from wiki_racer.exceptions import InvalidEndpoint
from wiki_racer.utils.wiki_helpers import language_of
from wiki_racer.wikipedia.link_service import extract_links

# Maintenance banner Wikipedia puts on articles that no other article links to
ORPHAN_SELECTOR = "table.metadata.plainlinks.ambox.ambox-style.ambox-Orphan"


def is_orphan(html: str) -> bool:
    soup = BeautifulSoup(html, "html.parser")
    return soup.select_one(ORPHAN_SELECTOR) is not None


class PageChecker:
    """
    Validates a start/end pair before a race.

    Checks, in order:
    1. Both URLs are Wikipedia article URLs of the same language edition.
    2. Both pages load with HTTP 200.
    3. The start page links to at least one article (not a dead end).
    4. The end page is not tagged as an orphan.
    """
    def __init__(self, client: httpx.AsyncClient, timeout: float = 15.0):
        self.client = client
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    async def check_pages(self, start: str, end: str) -> None:
        """
        Raises:
            InvalidEndpoint: With a readable reason when any check fails
        """
        languages = []
        for page in (start, end):
            language = language_of(page)
            if language is None:
                raise InvalidEndpoint(f"{page} does not appear to be a valid Wikipedia page: Invalid Wikipedia URL")
            languages.append(language)

        if len(set(languages)) > 1:
            raise InvalidEndpoint("Pages are in different languages.")

        html: Dict[str, str] = {}
        for page in (start, end):
            html[page] = await self._fetch_page(page)

        if not extract_links(html[start], start):
            raise InvalidEndpoint("Start page is a dead-end page with no Wikipedia links.")

        if is_orphan(html[end]):
            raise InvalidEndpoint("End page is an orphan page with no Wikipedia pages linking to it.")

        self.logger.debug(f"Pages '{start}' and '{end}' passed validation")

    async def _fetch_page(self, page: str) -> str:
        try:
            response = await self.client.get(page, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise InvalidEndpoint(f"{page} does not appear to be a valid Wikipedia page: {e}") from e

        if response.status_code != 200:
            raise InvalidEndpoint(
                f"{page} does not appear to be a valid Wikipedia page: HTTP {response.status_code}"
            )
        return response.text
