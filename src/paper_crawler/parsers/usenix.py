"""
USENIX Parser - Extracts papers from USENIX technical-sessions pages.

Page layout (e.g. https://www.usenix.org/conference/usenixsecurity24/technical-sessions):

    <title>USENIX Security '24 Technical Sessions | USENIX</title>
    <article class="node-paper">
        <h2><a href="/conference/.../presentation/...">Title</a></h2>
        <div class="field-name-field-paper-people-text"><p>Authors</p></div>
        <div class="field-name-field-paper-description-long"><p>...</p></div>
    </article>
"""

import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .base import PaperParser
from ..errors import ParseError
from ..models import (
    Paper,
    ABSTRACT_NOT_FOUND,
    AUTHORS_NOT_FOUND,
    TITLE_NOT_FOUND,
    URL_NOT_FOUND,
)


PAGE_TITLE_SELECTOR = "head > title"
PAPER_ARTICLE_SELECTOR = "article.node-paper"
TITLE_LINK_SELECTOR = "h2 a"
# Tried in order; older pages use "presented-by"
AUTHORS_SELECTORS = (
    "div.field-name-field-paper-people-text p",
    "div.field-name-field-presented-by p",
)
ABSTRACT_DIV_SELECTOR = "div.field-name-field-paper-description-long"
ABSTRACT_P_SELECTOR = "p"

# "USENIX Security '24 Technical Sessions" -> ("USENIX Security", "24")
CONFERENCE_PATTERN = re.compile(r"^(.*?)\s+'?(\d{2})")


class UsenixParser(PaperParser):
    """Parser for www.usenix.org conference listings."""

    name = "usenix"

    def parse_and_extract(self, html_content: str, url: str) -> List[Paper]:
        soup = self.make_soup(html_content)

        page_title = self.extract_page_title(soup)
        conference_name, year = self.extract_conference_info(page_title)

        self.logger.info(f"Processing (USENIX): Conf={conference_name}, Year={year}")

        return self.extract_papers(soup, conference_name, year, url)

    @staticmethod
    def extract_page_title(soup: BeautifulSoup) -> str:
        title_tag = soup.select_one(PAGE_TITLE_SELECTOR)
        if title_tag is None:
            raise ParseError("Overall page title not found")
        return title_tag.get_text().strip()

    @staticmethod
    def extract_conference_info(page_title: str) -> Tuple[str, int]:
        """
        Derive (conference_name, year) from the page title.

        Falls back to the text before the first '|' and the current year
        when the title carries no two-digit year.
        """
        match = CONFERENCE_PATTERN.match(page_title)
        if match:
            return match.group(1).strip(), 2000 + int(match.group(2))

        current_year = datetime.now(timezone.utc).year
        return page_title.split("|")[0].strip(), current_year

    def extract_papers(self, soup: BeautifulSoup, conference_name: str,
                       year: int, base_url: str) -> List[Paper]:
        papers = []

        for article in soup.select(PAPER_ARTICLE_SELECTOR):
            title, paper_url = self._extract_title_and_url(article, base_url)
            papers.append(Paper(
                conference_name=conference_name,
                year=year,
                title=title,
                source_url=paper_url,
                authors=self._extract_authors(article),
                abstract_text=self._extract_abstract(article),
            ))

        if not papers:
            self.logger.warning(
                f"No papers found in the USENIX document for {conference_name} {year}."
            )

        return papers

    def _extract_title_and_url(self, article: Tag, base_url: str) -> Tuple[str, str]:
        title = TITLE_NOT_FOUND
        paper_url = URL_NOT_FOUND

        link = article.select_one(TITLE_LINK_SELECTOR)
        if link is None:
            return title, paper_url

        title = link.get_text().strip()
        href = link.get("href")
        if href is not None:
            try:
                paper_url = urljoin(base_url, href)
            except ValueError as e:
                paper_url = f"Failed to join URL: {href} with base {base_url}: {e}"
                self.logger.warning(paper_url)

        return title, paper_url

    @staticmethod
    def _extract_authors(article: Tag) -> str:
        for selector in AUTHORS_SELECTORS:
            authors_el = article.select_one(selector)
            if authors_el is not None:
                return authors_el.get_text().strip()
        return AUTHORS_NOT_FOUND

    @staticmethod
    def _extract_abstract(article: Tag) -> str:
        abstract_div: Optional[Tag] = article.select_one(ABSTRACT_DIV_SELECTOR)
        if abstract_div is None:
            return ABSTRACT_NOT_FOUND

        text = "\n".join(
            p.get_text() for p in abstract_div.select(ABSTRACT_P_SELECTOR)
        ).strip()
        return text or ABSTRACT_NOT_FOUND
