"""
Solver models for path finding functionality.
"""

from enum import Enum

from pydantic import BaseModel, Field


class SearchMode(str, Enum):
    """How the frontier search expands the graph."""
    SHORTEST = "shortest"
    FIRST = "first"


class SearchStats(BaseModel):
    """Counters collected during a single search."""
    levels_expanded: int = Field(0, description="Number of expansion rounds completed")
    nodes_fetched: int = Field(0, description="Number of nodes whose links were requested")
    nodes_discovered: int = Field(0, description="Size of the visited set when the search ended")
    elapsed_seconds: float = Field(0.0, description="Wall-clock time spent searching")
