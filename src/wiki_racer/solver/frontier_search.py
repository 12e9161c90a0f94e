"""
Breadth-first path search over a lazily fetched link graph.
Core component that orchestrates the search algorithm.
"""
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from wiki_racer.solver.dispatcher import FetchDispatcher
from wiki_racer.solver.models import SearchMode, SearchStats

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """Visited set and path map for one search."""
    accept: FrozenSet[str]
    visited: Set[str] = field(default_factory=set)
    path_map: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def starting_at(cls, start: str, accept: FrozenSet[str]) -> "SearchState":
        return cls(accept=accept, visited={start}, path_map={start: [start]})

    def absorb(self, page: str, neighbors: Iterable[str], discovered: List[str]) -> Optional[List[str]]:
        """
        Record the neighbors of an expanded page.

        Newly seen neighbors are marked visited, get their path, and are
        appended to ``discovered``. Paths are never overwritten, so the first
        page to discover a node stays its parent.

        Returns:
            The full path if a neighbor is in the accept set, otherwise None
        """
        for neighbor in neighbors:
            if neighbor in self.accept:
                return self.path_map[page] + [neighbor]

            if neighbor not in self.visited and neighbor != page:
                self.visited.add(neighbor)
                self.path_map[neighbor] = self.path_map[page] + [neighbor]
                discovered.append(neighbor)
        return None


class FrontierSearch:
    """
    Finds a path from a start page to any page of an accept set.

    Shortest mode expands one whole BFS level per round: the level is handed
    to the dispatcher as a single batch and only after every fetch in it has
    resolved are the results folded into the search state. Level d+1 never
    starts before level d is done, which is what makes the first discovery of
    a node a shortest one.

    First mode keeps the same bookkeeping but expands pages one at a time from
    a FIFO queue.
    """

    def __init__(self, dispatcher: FetchDispatcher, max_depth: Optional[int] = None):
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be >= 1 or None, got {max_depth}")
        self.dispatcher = dispatcher
        self.max_depth = max_depth
        self.stats = SearchStats()

    async def find_shortest_path(self, start: str, accept_set: Iterable[str]) -> Optional[List[str]]:
        return await self.search(start, accept_set, SearchMode.SHORTEST)

    async def find_first_path(self, start: str, accept_set: Iterable[str]) -> Optional[List[str]]:
        return await self.search(start, accept_set, SearchMode.FIRST)

    async def search(
        self,
        start: str,
        accept_set: Iterable[str],
        mode: SearchMode = SearchMode.SHORTEST,
    ) -> Optional[List[str]]:
        """
        Search from start until a page in accept_set is linked.

        Args:
            start: Starting page id
            accept_set: Page ids that satisfy the goal
            mode: SHORTEST for level-batched BFS, FIRST for page-by-page expansion

        Returns:
            List of page ids from start to the accepted page, or None if no path found
        """
        accept = frozenset(accept_set)
        self.stats = SearchStats()
        start_time = time.time()

        try:
            if start in accept:
                logger.info(f"Start page '{start}' is already a target")
                path: Optional[List[str]] = [start]
            elif mode == SearchMode.FIRST:
                path = await self._search_first(start, accept)
            else:
                path = await self._search_levels(start, accept)
        finally:
            self.stats.elapsed_seconds = time.time() - start_time

        if path:
            logger.info(f"Path found in {self.stats.elapsed_seconds:.2f}s, "
                        f"{self.stats.levels_expanded} rounds, {len(path) - 1} hops")
            logger.info(f"Path: {' → '.join(path)}")
        else:
            logger.warning(f"No path found after {self.stats.levels_expanded} rounds "
                           f"({self.stats.nodes_discovered} pages discovered)")
        return path

    async def _search_levels(self, start: str, accept: FrozenSet[str]) -> Optional[List[str]]:
        state = SearchState.starting_at(start, accept)
        frontier = [start]

        while frontier:
            if self._depth_exhausted(self.stats.levels_expanded):
                logger.warning(f"Depth limit {self.max_depth} reached with {len(frontier)} pages unexpanded")
                return None

            current_level = frontier
            frontier = []
            logger.info(f"Level {self.stats.levels_expanded + 1}: expanding {len(current_level)} pages")

            neighbors_data = await self.dispatcher.dispatch(current_level)
            self.stats.levels_expanded += 1
            self.stats.nodes_fetched += len(current_level)

            for page, neighbors in neighbors_data.items():
                path = state.absorb(page, neighbors, frontier)
                if path:
                    self.stats.nodes_discovered = len(state.visited)
                    return path

            self.stats.nodes_discovered = len(state.visited)
            logger.debug(f"After level {self.stats.levels_expanded}: visited={len(state.visited)}, "
                         f"next frontier={len(frontier)}")

        return None

    async def _search_first(self, start: str, accept: FrozenSet[str]) -> Optional[List[str]]:
        state = SearchState.starting_at(start, accept)
        queue = deque([start])
        depth_cut = False

        while queue:
            page = queue.popleft()
            if self._depth_exhausted(len(state.path_map[page]) - 1):
                if not depth_cut:
                    logger.warning(f"Depth limit {self.max_depth} reached; deeper pages are not expanded")
                    depth_cut = True
                continue

            neighbors_data = await self.dispatcher.dispatch([page])
            self.stats.levels_expanded += 1
            self.stats.nodes_fetched += 1

            discovered: List[str] = []
            path = state.absorb(page, neighbors_data.get(page, []), discovered)
            self.stats.nodes_discovered = len(state.visited)
            if path:
                return path
            queue.extend(discovered)

        return None

    def _depth_exhausted(self, depth: int) -> bool:
        return self.max_depth is not None and depth >= self.max_depth
