"""
Pytest configuration and fixtures for paper crawler tests.
"""

from typing import Dict, List, Optional, Union
from unittest.mock import MagicMock

import pytest
import requests

from paper_crawler.core.paper_crawler import CrawlerConfig, PaperCrawler
from paper_crawler.pipeline.stages.fetch_stage import FetchConfig, FetchStage, HTTPFetcher
from paper_crawler.pipeline.stages.storage_stage import SQLiteStorage, StorageConfig, StorageStage


BASE_URL = "https://www.usenix.org/conference/usenixsecurity24/technical-sessions"


def make_article(title: Optional[str] = "A Paper",
                 href: Optional[str] = "/conference/usenixsecurity24/presentation/a-paper",
                 authors: Optional[str] = "Alice, University A; Bob, University B",
                 abstract: Optional[List[str]] = None,
                 authors_class: str = "field-name-field-paper-people-text") -> str:
    """Build one <article class="node-paper"> block; None omits the part."""
    parts = ['<article class="node node-paper">']

    if title is not None:
        href_attr = f' href="{href}"' if href is not None else ""
        parts.append(f"<h2><a{href_attr}>  {title}  </a></h2>")

    if authors is not None:
        parts.append(f'<div class="field {authors_class}"><p>{authors}</p></div>')

    if abstract is None:
        abstract = ["Some abstract text."]
    if abstract != []:
        paragraphs = "".join(f"<p>{p}</p>" for p in abstract)
        parts.append(f'<div class="field field-name-field-paper-description-long">{paragraphs}</div>')

    parts.append("</article>")
    return "\n".join(parts)


def make_page(articles: List[str], title: Optional[str] = "USENIX Security '24 Technical Sessions | USENIX") -> str:
    head = f"<title>{title}</title>" if title is not None else ""
    body = "\n".join(articles)
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


def make_papers_page(count: int, prefix: str = "Paper") -> str:
    return make_page([
        make_article(title=f"{prefix} {i}", href=f"/presentation/{prefix.lower()}-{i}")
        for i in range(count)
    ])


def make_response(status_code: int = 200, text: str = "", url: str = "") -> MagicMock:
    """Return a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.url = url
    response.headers = {"Content-Type": "text/html; charset=utf-8"}
    return response


def make_session(pages: Dict[str, Union[str, int, Exception]]) -> MagicMock:
    """
    Mock requests.Session whose get() answers from a URL map.

    Values: HTML string (200), int (status code with empty body),
    or an exception instance to raise.
    """
    session = MagicMock(spec=requests.Session)

    def fake_get(url, **kwargs):
        page = pages[url]
        if isinstance(page, Exception):
            raise page
        if isinstance(page, int):
            return make_response(status_code=page, url=url)
        return make_response(text=page, url=url)

    session.get.side_effect = fake_get
    return session


@pytest.fixture
def storage_config(tmp_path) -> StorageConfig:
    return StorageConfig(database_path=str(tmp_path / "papers.sqlite"))


@pytest.fixture
def storage(storage_config) -> SQLiteStorage:
    return SQLiteStorage(storage_config)


@pytest.fixture
def build_crawler(storage_config, storage):
    """Factory for a PaperCrawler wired to a mock session and a temp database."""

    def _build(pages: Dict[str, Union[str, int, Exception]]):
        config = CrawlerConfig(storage=storage_config)
        session = make_session(pages)
        fetch_stage = FetchStage(config.fetch, fetcher=HTTPFetcher(FetchConfig(), session=session))
        storage_stage = StorageStage(storage_config, storage=storage)
        crawler = PaperCrawler(config, fetch_stage=fetch_stage, storage_stage=storage_stage)
        return crawler, session

    return _build
