"""Local runner for the scraper and the function handler."""

import json
from pathlib import Path

import pandas as pd
import typer

from .config import Config
from .handler import lambda_handler
from .logger import setup_logging
from .models import ExtractionResult
from .scraper import LinkScraper

app = typer.Typer(
    name="serverless-link-scraper",
    help="Run the link scraper locally.",
    add_completion=False,
)


def write_csv(result: ExtractionResult, output_csv: Path) -> None:
    """Write extracted links to a CSV file with ``text`` and ``href`` columns."""
    df = pd.DataFrame([link.to_dict() for link in result.data], columns=["text", "href"])
    df.to_csv(output_csv, index=False)


@app.command()
def scrape(
    url: str | None = typer.Option(None, "--url", "-u", help="Page to scrape (defaults to TARGET_URL)"),
    retries: int | None = typer.Option(None, "--retries", "-r", min=1, help="Total attempts (defaults to MAX_RETRIES)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write links to this CSV file"),
):
    """Scrape one page and print the extraction result as JSON."""
    config = Config.from_env()
    log = setup_logging(config.log_level, "text")
    scraper = LinkScraper(config, log=log)

    retries = config.max_retries if retries is None else retries
    if retries > 1:
        result = scraper.scrape_with_retry(url, max_retries=retries)
    else:
        result = scraper.scrape(url)

    typer.echo(json.dumps(result.to_dict(), indent=2))

    if not result.success:
        raise typer.Exit(1)

    if output:
        write_csv(result, output)
        log.info("Links written", extra={"output": str(output), "count": result.count})


@app.command()
def invoke(
    event: Path | None = typer.Option(None, "--event", "-e", exists=True, help="Event JSON file"),
):
    """Invoke the function handler locally and print the response envelope."""
    payload = json.loads(event.read_text(encoding="utf-8")) if event else {}
    response = lambda_handler(payload, None)
    typer.echo(json.dumps(response, indent=2))


if __name__ == "__main__":
    app()
