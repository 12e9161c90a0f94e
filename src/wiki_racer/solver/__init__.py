# Lazy-graph path solver

from .retry import retry
from .dispatcher import FetchDispatcher, DispatchStats
from .frontier_search import FrontierSearch, SearchState
from .models import SearchMode, SearchStats

__all__ = [
    "retry",
    "FetchDispatcher",
    "DispatchStats",
    "FrontierSearch",
    "SearchState",
    "SearchMode",
    "SearchStats",
]
