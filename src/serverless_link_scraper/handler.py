"""Function entry point: turns an invocation event into a JSON HTTP response."""

import json
import logging
from typing import Any

from .config import Config
from .logger import get_logger, setup_logging
from .models import ResponseEnvelope
from .scraper import LinkScraper

logger = get_logger(__name__)

SUCCESS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ERROR_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def target_url_from_event(event: Any) -> str | None:
    """Optional URL override from a direct payload or an HTTP query string."""
    if not isinstance(event, dict):
        return None
    if isinstance(event.get("url"), str) and event["url"].strip():
        return event["url"].strip()
    params = event.get("queryStringParameters") or {}
    if isinstance(params, dict) and isinstance(params.get("url"), str) and params["url"].strip():
        return params["url"].strip()
    return None


def error_response(exc: Exception) -> ResponseEnvelope:
    """500 envelope carrying the exception text and no traceback."""
    return ResponseEnvelope(
        status_code=500,
        headers=dict(ERROR_HEADERS),
        body=json.dumps({"error": "Internal server error", "message": str(exc)}),
    )


def handle(
    event: Any,
    context: Any,
    scraper: LinkScraper,
    log: logging.Logger | None = None,
) -> ResponseEnvelope:
    """
    Run one scrape and wrap the result in a response envelope.

    Args:
        event: Invocation event (opaque apart from an optional ``url`` override)
        context: Runtime context, read for its request id only
        scraper: Scraper to invoke exactly once
        log: Logger for unexpected failures

    Returns:
        200 envelope carrying the extraction result, or 500 when the scraper raised
    """
    log = log or logger
    request_id = getattr(context, "aws_request_id", None)

    try:
        url = target_url_from_event(event)
        if scraper.config.max_retries > 1:
            result = scraper.scrape_with_retry(url)
        else:
            result = scraper.scrape(url)
        return ResponseEnvelope(
            status_code=200,
            headers=dict(SUCCESS_HEADERS),
            body=json.dumps(result.to_dict()),
        )
    except Exception as e:
        log.exception("Unhandled error in handler", extra={"request_id": request_id})
        return error_response(e)


def lambda_handler(event: Any, context: Any) -> dict[str, Any]:
    """Platform entry point configured in serverless.yml."""
    try:
        config = Config.from_env()
        log = setup_logging(config.log_level, config.log_format)
        scraper = LinkScraper(config, log=log)
    except Exception as e:
        logger.exception("Handler setup failed")
        return error_response(e).to_dict()

    return handle(event, context, scraper, log=log).to_dict()
