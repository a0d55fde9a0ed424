"""Exceptions raised inside serverless link scraper."""

from typing import Any


class ScraperError(Exception):
    """Base exception for all scraper errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ScraperError):
    """Invalid value in the environment configuration."""


class ParseError(ScraperError):
    """HTML could not be parsed into links."""
