"""
Tests for the paper extraction stage.
"""

import pytest

from paper_crawler.errors import ParseError
from paper_crawler.parsers.base import PaperParser
from paper_crawler.parsers.usenix import UsenixParser
from paper_crawler.pipeline.pipeline_data import PipelineData
from paper_crawler.pipeline.stages.parse_stage import ParseConfig, ParseStage

from conftest import BASE_URL, make_page, make_papers_page


class ExplodingParser(PaperParser):
    name = "exploding"

    def parse_and_extract(self, html_content, url):
        raise RuntimeError("selector blew up")


def test_extracts_papers():
    stage = ParseStage(ParseConfig())
    data = PipelineData(url=BASE_URL, parser=UsenixParser(), raw_html=make_papers_page(2))

    stage.run(data)

    assert len(data.papers) == 2
    assert stage.get_stats()['parse_stats']['papers_found'] == 2


def test_page_without_papers_is_not_an_error():
    stage = ParseStage(ParseConfig())
    data = PipelineData(url=BASE_URL, parser=UsenixParser(), raw_html=make_page([]))

    stage.run(data)

    assert data.papers == []
    assert stage.get_stats()['parse_stats']['pages_without_papers'] == 1
    assert stage.error_count == 0


def test_unexpected_parser_failure_becomes_parse_error():
    stage = ParseStage(ParseConfig())
    data = PipelineData(url=BASE_URL, parser=ExplodingParser(), raw_html="<html></html>")

    with pytest.raises(ParseError, match="selector blew up"):
        stage.run(data)

    assert stage.get_stats()['parse_stats']['pages_failed'] == 1


def test_missing_html():
    stage = ParseStage(ParseConfig())

    with pytest.raises(ParseError, match="no HTML"):
        stage.run(PipelineData(url=BASE_URL, parser=UsenixParser()))


def test_oversized_html():
    stage = ParseStage(ParseConfig(max_html_size_mb=1))
    data = PipelineData(url=BASE_URL, parser=UsenixParser(), raw_html="x" * (2 * 1024 * 1024))

    with pytest.raises(ParseError, match="too large"):
        stage.run(data)
