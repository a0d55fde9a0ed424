"""Serverless Link Scraper - fetch a web page and return its links from a cloud function."""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import Config
from .handler import lambda_handler
from .models import ExtractionResult, Link, ResponseEnvelope
from .scraper import LinkScraper

__all__ = ["Config", "ExtractionResult", "Link", "LinkScraper", "ResponseEnvelope", "lambda_handler"]
