import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


class RacerConfig(BaseModel):
    """Configuration for a race between two Wikipedia pages."""

    # Fetch dispatch
    max_concurrency: int = Field(30, ge=1, description="Maximum simultaneous page fetches")
    max_attempts: int = Field(3, ge=1, description="Attempts per page fetch before giving up")
    retry_delay: float = Field(2.0, ge=0, description="Seconds between fetch attempts")
    fetch_timeout: float = Field(30.0, gt=0, description="Timeout for one page fetch in seconds")

    # Page checks and redirect resolution
    check_timeout: float = Field(15.0, gt=0, description="Timeout for validation requests in seconds")

    # Search
    max_depth: Optional[int] = Field(None, ge=1, description="Give up after this many hops; None searches exhaustively")

    user_agent: str = "wiki-racer/0.1 (https://github.com/wiki-racer/wiki-racer)"
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls) -> "RacerConfig":
        """Create config from environment variables."""
        return cls(
            max_concurrency=int(os.getenv("WIKI_RACER_MAX_CONCURRENCY", "30")),
            max_attempts=int(os.getenv("WIKI_RACER_MAX_ATTEMPTS", "3")),
            retry_delay=float(os.getenv("WIKI_RACER_RETRY_DELAY", "2.0")),
            fetch_timeout=float(os.getenv("WIKI_RACER_FETCH_TIMEOUT", "30.0")),
            check_timeout=float(os.getenv("WIKI_RACER_CHECK_TIMEOUT", "15.0")),
            max_depth=_optional_int(os.getenv("WIKI_RACER_MAX_DEPTH")),
            user_agent=os.getenv("WIKI_RACER_USER_AGENT", cls.model_fields["user_agent"].default),
            log_level=os.getenv("WIKI_RACER_LOG_LEVEL", "INFO"),
        )

    def with_overrides(self, **overrides) -> "RacerConfig":
        """Return a validated copy with every non-None override applied."""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return RacerConfig.model_validate(values)
