"""
Paper Parser - Abstract base class for all site-specific parsers.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from bs4 import BeautifulSoup, FeatureNotFound

from ..models import Paper


class PaperParser(ABC):
    """
    Turns the HTML of one page into a list of Paper records.

    Subclasses implement parse_and_extract() and are registered in
    parsers.registry.PARSER_REGISTRY under a host pattern.
    """

    name: str = "base"

    def __init__(self, html_parser: str = "html.parser"):
        """
        Args:
            html_parser: BeautifulSoup tree builder ('html.parser', 'lxml', 'html5lib')
        """
        self.html_parser = html_parser
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def parse_and_extract(self, html_content: str, url: str) -> List[Paper]:
        """
        Parse HTML content and extract paper records.

        Args:
            html_content: Raw HTML of the page
            url: URL the page was fetched from, used as the base for links

        Returns:
            List of Paper records (possibly empty)

        Raises:
            ParseError: If the page lacks a required element
        """
        pass

    def make_soup(self, html_content: str) -> BeautifulSoup:
        """Build a document tree, falling back to 'html.parser' if needed."""
        try:
            return BeautifulSoup(html_content, self.html_parser)
        except FeatureNotFound:
            self.logger.warning(f"Parser '{self.html_parser}' not available, "
                                f"falling back to 'html.parser'")
            self.html_parser = "html.parser"
            return BeautifulSoup(html_content, self.html_parser)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name='{self.name}'>"
