"""Data models for serverless link scraper."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Link:
    """One hyperlink extracted from a page."""

    text: str
    href: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "href": self.href}


@dataclass
class ExtractionResult:
    """Result of one fetch-and-extract attempt."""

    success: bool
    data: list[Link] | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success:
            if self.error is not None or self.data is None:
                raise ValueError("Successful result requires data and no error")
        elif self.data is not None or not self.error:
            raise ValueError("Failed result requires a non-empty error and no data")

    @property
    def count(self) -> int | None:
        return len(self.data) if self.data is not None else None

    @classmethod
    def create_success(cls, links: list[Link]) -> "ExtractionResult":
        return cls(success=True, data=list(links))

    @classmethod
    def create_error(cls, error_message: str) -> "ExtractionResult":
        return cls(success=False, error=error_message)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the JSON body shape.

        Returns:
            ``{"success", "data", "count"}`` on success, ``{"success", "error"}`` on failure
        """
        if self.success:
            return {
                "success": True,
                "data": [link.to_dict() for link in self.data],
                "count": self.count,
            }
        return {"success": False, "error": self.error}


@dataclass
class ResponseEnvelope:
    """HTTP-style reply returned to the function runtime."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "headers": dict(self.headers), "body": self.body}
