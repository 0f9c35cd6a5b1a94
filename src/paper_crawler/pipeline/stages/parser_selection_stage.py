"""
Parser Selection Stage - Picks the site parser for a URL.
File: src/paper_crawler/pipeline/stages/parser_selection_stage.py
"""
import logging

from ..stage import PipelineStage
from ..pipeline_data import PipelineData
from ...parsers.registry import get_parser


class ParserSelectionStage(PipelineStage):
    """
    First pipeline stage - selects a parser from the URL's host.

    Raises InvalidURLError for malformed URLs and NoParserFoundError for
    hosts without a registered parser.
    """

    def __init__(self, html_parser: str = "html.parser"):
        super().__init__(name="ParserSelection")
        self.html_parser = html_parser
        self.logger = logging.getLogger(self.__class__.__name__)

    def process(self, data: PipelineData) -> PipelineData:
        data.parser = get_parser(data.url, html_parser=self.html_parser)
        return data
