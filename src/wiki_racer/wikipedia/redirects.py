import logging
from typing import FrozenSet, Set
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from wiki_racer.utils.wiki_helpers import article_url, is_article_url

# Characters Wikipedia leaves unescaped in article hrefs
TITLE_SAFE_CHARS = "/:(),'!*;@$&+=-._~"


class RedirectResolver:
    """
    Works out which URLs count as reaching the end page.

    A page reached through a redirect shows the canonical title in its heading,
    so the accept set holds the URL as given plus the URL built from the
    heading, both as displayed and percent-encoded the way article links are.
    """
    def __init__(self, client: httpx.AsyncClient, timeout: float = 15.0):
        self.client = client
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    async def resolve_aliases(self, end: str) -> FrozenSet[str]:
        try:
            response = await self.client.get(end, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.error(f"Failed to handle redirection for {end}: {e}")
            return frozenset([end])

        aliases: Set[str] = {end}

        final_url = str(response.url)
        if final_url != end and is_article_url(final_url):
            aliases.add(final_url)

        heading = BeautifulSoup(response.text, "html.parser").find("h1")
        title = heading.get_text().strip() if heading else ""
        if title:
            canonical = article_url(end, title)
            aliases.add(canonical)
            aliases.add(article_url(end, quote(title.replace(" ", "_"), safe=TITLE_SAFE_CHARS)))

        self.logger.debug(f"Accepted end pages: {sorted(aliases)}")
        return frozenset(aliases)
