"""
Parsers Module - Site-specific paper extraction strategies.

Components:
-----------
- PaperParser: Abstract base class for site parsers
- UsenixParser: Parser for USENIX technical-sessions pages
- get_parser: Selects a parser from a URL's host via PARSER_REGISTRY

Adding a site:
--------------
class AcmParser(PaperParser):
    name = "acm"

    def parse_and_extract(self, html_content, url):
        ...

PARSER_REGISTRY.append(("acm.org", AcmParser))
"""

from .base import PaperParser
from .usenix import UsenixParser
from .registry import PARSER_REGISTRY, get_parser, get_host

__all__ = [
    'PaperParser',
    'UsenixParser',
    'PARSER_REGISTRY',
    'get_parser',
    'get_host',
]
