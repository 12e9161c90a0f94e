"""
Concurrency-limited neighbor fetching for one BFS level at a time.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Sequence

from wiki_racer.exceptions import FetchFailed
from wiki_racer.solver.retry import retry

logger = logging.getLogger(__name__)

NeighborFetcher = Callable[[str], Awaitable[List[str]]]


@dataclass
class DispatchStats:
    """Fetch counters for one dispatcher."""
    fetched: int = 0
    failed: int = 0
    in_flight: int = 0
    peak_in_flight: int = 0


class FetchDispatcher:
    """
    Fetches neighbor lists for a batch of nodes with at most
    ``max_concurrency`` fetches in flight.

    Each fetch runs under its own timeout and is retried with a fixed delay.
    A node whose fetch exhausts its retries gets an empty neighbor list, so a
    single broken page only removes edges from the search and never aborts
    the batch.
    """

    def __init__(
        self,
        fetch_neighbors: NeighborFetcher,
        max_concurrency: int = 30,
        max_attempts: int = 3,
        retry_delay: float = 2.0,
        fetch_timeout: float = 30.0,
    ):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

        self.fetch_neighbors = fetch_neighbors
        self.max_concurrency = max_concurrency
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.fetch_timeout = fetch_timeout
        self.stats = DispatchStats()
        self.failures: List[FetchFailed] = []
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def dispatch(self, nodes: Sequence[str]) -> Dict[str, List[str]]:
        """
        Fetch neighbors for every node in the batch.

        Args:
            nodes: Node ids to expand; duplicates are fetched once

        Returns:
            Dict mapping node id to its neighbor list, iterated in input order
        """
        batch = list(dict.fromkeys(nodes))
        if not batch:
            return {}

        logger.debug(f"Dispatching {len(batch)} fetches (capacity {self.max_concurrency})")
        neighbor_lists = await asyncio.gather(*[self._fetch(node) for node in batch])
        return dict(zip(batch, neighbor_lists))

    async def _fetch(self, node: str) -> List[str]:
        """Fetch one node inside the concurrency limit, absorbing final failure."""
        async with self._semaphore:
            self.stats.in_flight += 1
            self.stats.peak_in_flight = max(self.stats.peak_in_flight, self.stats.in_flight)
            try:
                neighbors = await retry(
                    lambda: self._fetch_with_timeout(node),
                    max_attempts=self.max_attempts,
                    delay=self.retry_delay,
                )
            except FetchFailed as e:
                e.node = node
                self.failures.append(e)
                self.stats.failed += 1
                logger.warning(f"Failed to get links for {node}: {e.last_error!r}")
                return []
            finally:
                self.stats.in_flight -= 1

        self.stats.fetched += 1
        return list(neighbors)

    async def _fetch_with_timeout(self, node: str) -> List[str]:
        return await asyncio.wait_for(self.fetch_neighbors(node), timeout=self.fetch_timeout)
