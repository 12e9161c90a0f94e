import asyncio
import json
import logging
import time
from typing import Optional

import typer

from wiki_racer.config import RacerConfig
from wiki_racer.exceptions import InvalidEndpoint
from wiki_racer.logging_config import setup_logging
from wiki_racer.models import RaceResult
from wiki_racer.racer import WikiRacer
from wiki_racer.solver import SearchMode


app = typer.Typer(add_completion=False)


@app.command()
def main(
    start: str = typer.Argument(..., help="Start page URL, e.g. https://en.wikipedia.org/wiki/Python"),
    end: str = typer.Argument(..., help="End page URL, in the same language edition as the start page"),
    mode: SearchMode = typer.Option(
        SearchMode.SHORTEST,
        "--mode",
        "-m",
        case_sensitive=False,
        help="'shortest' expands whole BFS levels in parallel; 'first' expands one page at a time.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    max_concurrency: Optional[int] = typer.Option(
        None, "--max-concurrency", "-c", min=1, help="Maximum simultaneous page fetches."
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", min=0.1, help="Per-page fetch timeout in seconds."),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", min=1, help="Attempts per page fetch."),
    retry_delay: Optional[float] = typer.Option(None, "--retry-delay", min=0, help="Seconds between attempts."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", "-d", min=1, help="Give up after this many hops."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR."),
):
    """
    Find a chain of Wikipedia links from START to END.
    """
    try:
        config = RacerConfig.from_env().with_overrides(
            max_concurrency=max_concurrency,
            fetch_timeout=timeout,
            max_attempts=retries,
            retry_delay=retry_delay,
            max_depth=max_depth,
            log_level=log_level,
        )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError too
        typer.echo(f"Fatal error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)

    setup_logging(level=config.log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    try:
        result = asyncio.run(run_race(start, end, mode, config))
    except InvalidEndpoint as e:
        typer.echo(e.message, err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        logger.debug("Race failed", exc_info=True)
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps(result.to_report(), indent=4, ensure_ascii=False))
    else:
        typer.echo(format_result(result))
        typer.echo(format_execution_time(time.time() - start_time))


async def run_race(start: str, end: str, mode: SearchMode, config: RacerConfig) -> RaceResult:
    async with WikiRacer(config) as racer:
        return await racer.race(start, end, mode)


def format_result(result: RaceResult) -> str:
    if result.path is None:
        return "No path found!"

    lines = [f"Path found ({result.path_length} hops):"]
    lines.extend(f"  {i}. {page}" for i, page in enumerate(result.path))
    return "\n".join(lines)


def format_execution_time(seconds: float) -> str:
    """Format like 'Execution Time: 1m 4.250s'."""
    minutes, remainder = divmod(seconds, 60)
    return f"Execution Time: {int(minutes)}m {remainder:.3f}s"


if __name__ == "__main__":
    app()
