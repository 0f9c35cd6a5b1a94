"""
Data Models - Paper records and crawl outcomes.
"""

from dataclasses import dataclass


AUTHORS_NOT_FOUND = "Authors not found"
ABSTRACT_NOT_FOUND = "Abstract not found"
TITLE_NOT_FOUND = "Paper title not found"
URL_NOT_FOUND = "Paper URL not found"


@dataclass(frozen=True)
class Paper:
    """
    A paper extracted from one page, not yet persisted.

    Every field is always populated; parsers substitute the sentinel
    strings above for data they cannot locate.
    """
    conference_name: str
    year: int
    title: str
    source_url: str
    authors: str
    abstract_text: str


@dataclass(frozen=True)
class StoredPaper:
    """A paper row read back from the store."""
    id: int
    conference_name: str
    year: int
    title: str
    source_url: str
    authors: str
    abstract_text: str


@dataclass(frozen=True)
class Conference:
    name: str
    year: int


@dataclass(frozen=True)
class CrawlResult:
    """Counts aggregated over one successful batch."""
    total_found: int = 0
    total_inserted: int = 0

    @property
    def summary(self) -> str:
        return (f"Crawl complete. Total papers found: {self.total_found}. "
                f"Total new papers inserted: {self.total_inserted}.")


@dataclass(frozen=True)
class CrawlReport:
    """Outcome handed to the calling layer: a flag and a one-line message."""
    ok: bool
    message: str

    def __str__(self) -> str:
        return self.message
