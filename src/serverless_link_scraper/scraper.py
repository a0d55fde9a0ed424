"""Fetch a page over HTTP and extract its links."""

import gzip
import logging
import time
import zlib
from collections.abc import Callable

import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from soupsieve import SelectorSyntaxError
from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from .config import Config
from .exceptions import ParseError, ScraperError
from .logger import get_logger
from .models import ExtractionResult, Link

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
}

def decode_body(response: requests.Response) -> str:
    """
    Decode a response body, undoing gzip or deflate content encoding.

    ``requests`` normally decompresses bodies itself; when the bytes turn out
    not to be compressed the client's own text decoding is used unchanged.

    Args:
        response: Completed response

    Returns:
        Body as text
    """
    content_encoding = response.headers.get("Content-Encoding", "").strip().lower()
    raw = response.content

    if content_encoding == "gzip":
        try:
            data = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error):
            return response.text
    elif content_encoding == "deflate":
        try:
            data = zlib.decompress(raw)
        except zlib.error:
            # some servers send raw deflate without the zlib header
            try:
                data = zlib.decompress(raw, -zlib.MAX_WBITS)
            except zlib.error:
                return response.text
    else:
        return response.text

    charset = response.encoding or response.apparent_encoding or "utf-8"
    try:
        return data.decode(charset, errors="replace")
    except LookupError:
        return data.decode("utf-8", errors="replace")


def retry(
    func: Callable[[], ExtractionResult],
    max_retries: int = 3,
    delay: float = 3.0,
    sleep: Callable[[float], None] = time.sleep,
    log: logging.Logger | None = None,
) -> ExtractionResult:
    """
    Call ``func`` until it returns a successful result or attempts run out.

    Every failure is retried the same way, with a fixed blocking delay.

    Args:
        func: Zero-argument callable returning an ExtractionResult
        max_retries: Total number of attempts
        delay: Seconds to wait between attempts
        sleep: Sleep function
        log: Logger to report failed attempts to

    Returns:
        The first successful result, or a failure naming the attempt count
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    log = log or logger

    def log_failure(retry_state: RetryCallState) -> None:
        log.warning(
            "Scrape attempt failed",
            extra={
                "attempt": retry_state.attempt_number,
                "max_retries": max_retries,
                "error": retry_state.outcome.result().error,
            },
        )

    def give_up(retry_state: RetryCallState) -> ExtractionResult:
        last = retry_state.outcome.result()
        return ExtractionResult.create_error(f"Failed after {retry_state.attempt_number} attempts: {last.error}")

    retrying = Retrying(
        stop=stop_after_attempt(max_retries),
        wait=wait_fixed(delay),
        retry=retry_if_result(lambda result: not result.success),
        sleep=sleep,
        after=log_failure,
        retry_error_callback=give_up,
    )
    return retrying(func)


class LinkScraper:
    """Fetch one page and turn its hyperlinks into records."""

    def __init__(self, config: Config | None = None, log: logging.Logger | None = None):
        """
        Initialize link scraper.

        Args:
            config: Optional Config. If None, reads it from the environment.
            log: Optional logger. If None, uses the module logger.
        """
        self.config = config or Config.from_env()
        self.log = log or logger
        self.headers = dict(DEFAULT_HEADERS)

    def fetch_page(self, url: str) -> str:
        """
        Download ``url`` and return its decoded body.

        Raises:
            requests.RequestException: On network failure or non-2xx status
        """
        response = requests.get(
            url,
            headers=self.headers,
            timeout=self.config.timeout,
            proxies=self.config.proxies,
            allow_redirects=True,
        )
        response.raise_for_status()
        return decode_body(response)

    def extract_links(self, html: str) -> list[Link]:
        """
        Extract the configured elements from HTML in document order.

        Args:
            html: Page markup

        Returns:
            One Link per matched element, with ``href`` empty when the attribute is missing
        """
        try:
            soup = BeautifulSoup(html, "html.parser")
            elements = soup.select(self.config.selector)
        except (ParserRejectedMarkup, SelectorSyntaxError, ValueError) as e:
            raise ParseError(f"Could not parse HTML: {e}", {"selector": self.config.selector}) from e

        return [
            Link(text=element.get_text(" ", strip=True), href=element.get("href", ""))
            for element in elements
        ]

    def scrape(self, url: str | None = None) -> ExtractionResult:
        """
        Fetch ``url`` (or the configured target) and extract its links.

        Failures never escape; they come back as a failed ExtractionResult.

        Args:
            url: Page to scrape, defaults to ``config.target_url``

        Returns:
            ExtractionResult with the links or an error description
        """
        url = url or self.config.target_url
        details = {}
        self.log.info("Starting scrape", extra={"url": url, "proxy": bool(self.config.proxies)})

        try:
            html = self.fetch_page(url)
            links = self.extract_links(html)
        except requests.Timeout as e:
            error = f"Request timed out after {self.config.timeout}s: {e}"
        except requests.HTTPError as e:
            error = f"HTTP error: {e}"
        except requests.RequestException as e:
            error = f"Request failed: {str(e) or type(e).__name__}"
        except ScraperError as e:
            error = e.message
            details = e.details
        else:
            self.log.info("Scrape successful", extra={"url": url, "count": len(links)})
            return ExtractionResult.create_success(links)

        self.log.error("Scrape failed", extra={"url": url, "error": error, "details": details})
        return ExtractionResult.create_error(error)

    def scrape_with_retry(
        self,
        url: str | None = None,
        max_retries: int | None = None,
        delay: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> ExtractionResult:
        """
        Scrape with a bounded number of attempts and a fixed delay between them.

        Args:
            url: Page to scrape, defaults to ``config.target_url``
            max_retries: Total attempts, defaults to ``config.max_retries``
            delay: Seconds between attempts, defaults to ``config.retry_delay``
            sleep: Sleep function

        Returns:
            ExtractionResult; exhausting the attempts yields a failed result, never an exception
        """
        return retry(
            lambda: self.scrape(url),
            max_retries=self.config.max_retries if max_retries is None else max_retries,
            delay=self.config.retry_delay if delay is None else delay,
            sleep=sleep,
            log=self.log,
        )
