from typing import List, Optional

from pydantic import BaseModel, Field

from wiki_racer.solver.models import SearchMode, SearchStats


class RaceResult(BaseModel):
    """Outcome of one race between two Wikipedia pages."""
    start: str = Field(..., min_length=1, description="Start page URL as given")
    end: str = Field(..., min_length=1, description="End page URL as given")
    mode: SearchMode = Field(SearchMode.SHORTEST, description="Search mode used")
    path: Optional[List[str]] = Field(None, description="Page URLs from start to end, or None if no path exists")
    elapsed_seconds: float = Field(0.0, description="Total time including page checks")
    stats: SearchStats = Field(default_factory=SearchStats)

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def path_length(self) -> Optional[int]:
        """Number of hops in the path."""
        if self.path is None:
            return None
        return len(self.path) - 1

    def to_report(self) -> dict:
        """JSON-ready summary; a missing path is reported as a message string."""
        return {
            "start": self.start,
            "end": self.end,
            "path": self.path if self.path is not None else "No path! :(",
            "mode": self.mode.value,
            "hops": self.path_length,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "stats": self.stats.model_dump(),
        }
