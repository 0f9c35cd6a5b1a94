"""
Crawl Errors - Exception hierarchy used inside the ingestion pipeline.

Every stage raises a subclass of CrawlError. The orchestrator decides which
ones are skipped per URL and which ones abort the batch; only the rendered
message of a fatal error ever leaves the package.
"""

from typing import Optional


class CrawlError(Exception):
    """Base class for all pipeline errors."""
    pass


class InvalidURLError(CrawlError):
    """Raised when a URL string cannot be parsed."""

    def __init__(self, url: str, reason: str = "malformed URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL: {url} ({reason})")


class NoParserFoundError(CrawlError):
    """Raised when no registered parser handles the URL's host."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No parser found for URL: {url}")


class FetchError(CrawlError):
    """Raised on transport failures (DNS, TLS, timeout, connection reset)."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch URL: {url}: {message}")


class HTTPStatusError(FetchError):
    """Raised when the server answers with a non-success status code."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        CrawlError.__init__(self, f"HTTP error: HTTP Error for {url}: {status_code}")


class ParseError(CrawlError):
    """Raised when a page lacks a required anchor or parser code fails."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(f"Parsing error: {message}")


class StorageError(CrawlError):
    """Raised on insert or transaction-control failures. Fatal for a batch."""

    def __init__(self, message: str):
        super().__init__(f"Database error: {message}")
