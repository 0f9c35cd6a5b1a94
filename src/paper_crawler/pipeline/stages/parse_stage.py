"""
Paper Extraction Stage - Runs the selected site parser over fetched HTML.
"""

import logging
from dataclasses import dataclass

from ..stage import PipelineStage
from ..pipeline_data import PipelineData
from ...errors import ParseError


SUPPORTED_PARSERS = ("html.parser", "lxml", "html5lib")


@dataclass
class ParseConfig:
    """Configuration for the extraction stage."""
    parser: str = "html.parser"  # 'html.parser', 'lxml', or 'html5lib'

    # Performance
    max_html_size_mb: int = 10  # Refuse to parse HTML larger than this


class ParseStage(PipelineStage):
    """
    Stage 3: Paper extraction.

    Responsibilities:
    - Hand the raw HTML to the parser chosen by ParserSelectionStage
    - Turn any failure inside parser code into ParseError
    - Store the extracted records on the pipeline data
    """

    def __init__(self, config: ParseConfig):
        super().__init__(name="PaperExtraction")
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

        self.stats = {
            'pages_parsed': 0,
            'pages_failed': 0,
            'pages_without_papers': 0,
            'papers_found': 0,
        }

    def process(self, data: PipelineData) -> PipelineData:
        try:
            data.papers = self._extract(data)
        except ParseError:
            self.stats['pages_failed'] += 1
            raise

        self.stats['pages_parsed'] += 1
        self.stats['papers_found'] += len(data.papers)
        if not data.papers:
            self.stats['pages_without_papers'] += 1

        return data

    def _extract(self, data: PipelineData):
        if data.parser is None:
            raise ParseError("no parser selected", url=data.url)
        if data.raw_html is None:
            raise ParseError("no HTML content to parse", url=data.url)

        html_size_mb = len(data.raw_html.encode('utf-8')) / (1024 * 1024)
        if html_size_mb > self.config.max_html_size_mb:
            raise ParseError(f"HTML too large to parse: {html_size_mb:.2f} MB", url=data.url)

        try:
            return data.parser.parse_and_extract(data.raw_html, data.url)
        except ParseError:
            raise
        except Exception as e:
            self.logger.debug(f"Parser {data.parser!r} raised on {data.url}", exc_info=True)
            raise ParseError(str(e), url=data.url) from e

    def get_stats(self) -> dict:
        base_stats = super().get_stats()
        base_stats['parse_stats'] = self.stats.copy()
        return base_stats
