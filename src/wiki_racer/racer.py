"""
WikiRacer - finds a chain of links between two live Wikipedia pages.

Validates the pair, works out which URLs count as the end page, then runs a
frontier search whose page fetches go through a concurrency-limited dispatcher.
"""
import logging
import time
from typing import Optional

import httpx

from wiki_racer.config import RacerConfig
from wiki_racer.models import RaceResult
from wiki_racer.solver import FetchDispatcher, FrontierSearch, SearchMode
from wiki_racer.wikipedia import LinkService, PageChecker, RedirectResolver

logger = logging.getLogger(__name__)


def create_http_client(config: RacerConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": config.user_agent, "Accept-Encoding": "gzip"},
        timeout=httpx.Timeout(config.fetch_timeout),
        limits=httpx.Limits(max_connections=config.max_concurrency),
        follow_redirects=True,
    )


class WikiRacer:
    """
    Races between Wikipedia pages.

    Use as an async context manager; the HTTP client is closed on exit unless
    it was passed in by the caller.
    """

    def __init__(self, config: Optional[RacerConfig] = None, client: Optional[httpx.AsyncClient] = None):
        self.config = config or RacerConfig()
        self._owns_client = client is None
        self.client = client or create_http_client(self.config)

        self.link_service = LinkService(self.client, timeout=self.config.fetch_timeout)
        self.page_checker = PageChecker(self.client, timeout=self.config.check_timeout)
        self.redirect_resolver = RedirectResolver(self.client, timeout=self.config.check_timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def race(self, start: str, end: str, mode: SearchMode = SearchMode.SHORTEST) -> RaceResult:
        """
        Find a path from start to end.

        Args:
            start: Start page URL
            end: End page URL
            mode: SHORTEST or FIRST

        Returns:
            RaceResult whose path is None when the end page is unreachable

        Raises:
            InvalidEndpoint: If the pair fails validation; no search is run
        """
        start_time = time.time()
        logger.info(f"Racing from '{start}' to '{end}' ({mode.value} path)")

        await self.page_checker.check_pages(start, end)
        accept_set = await self.redirect_resolver.resolve_aliases(end)

        dispatcher = FetchDispatcher(
            self.link_service.get_links,
            max_concurrency=self.config.max_concurrency,
            max_attempts=self.config.max_attempts,
            retry_delay=self.config.retry_delay,
            fetch_timeout=self.config.fetch_timeout,
        )
        search = FrontierSearch(dispatcher, max_depth=self.config.max_depth)

        logger.info("Processing...please wait")
        path = await search.search(start, accept_set, mode)

        if dispatcher.failures:
            failed_pages = ", ".join(failure.node for failure in dispatcher.failures)
            logger.warning(f"{len(dispatcher.failures)} pages could not be fetched and were treated as dead ends: {failed_pages}")

        return RaceResult(
            start=start,
            end=end,
            mode=mode,
            path=path,
            elapsed_seconds=time.time() - start_time,
            stats=search.stats,
        )

    async def close(self):
        """Close the HTTP client if this racer created it."""
        if self._owns_client:
            await self.client.aclose()
