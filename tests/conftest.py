"""Shared fixtures for scraper tests."""

import pytest
import requests

from serverless_link_scraper.config import Config

SAMPLE_HTML = """
<html>
  <body>
    <a href="https://example.com/one">First link</a>
    <p>Some text <a href="/two"> Second  </a></p>
    <a>No href</a>
    <a href=""><span>Nested</span> text</a>
  </body>
</html>
"""


def make_response(
    content: bytes,
    status_code: int = 200,
    headers: dict | None = None,
    encoding: str | None = "utf-8",
    url: str = "https://example.com",
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response._content = content
    response.status_code = status_code
    response.headers.update(headers or {})
    response.encoding = encoding
    response.url = url
    response.reason = "OK" if status_code < 400 else "Error"
    return response


@pytest.fixture
def config():
    return Config(target_url="https://example.com", timeout=5, max_retries=3, retry_delay=0)


@pytest.fixture
def html_response():
    return make_response(SAMPLE_HTML.encode("utf-8"), headers={"Content-Type": "text/html"})
