"""
Parser Registry - Selects a site parser from a URL's host name.
"""

import logging
from typing import List, Tuple, Type
from urllib.parse import urlparse

from .base import PaperParser
from .usenix import UsenixParser
from ..errors import InvalidURLError, NoParserFoundError


logger = logging.getLogger(__name__)

# Ordered (host substring, parser class) table; first match wins.
# New sites: add a PaperParser subclass and an entry here.
PARSER_REGISTRY: List[Tuple[str, Type[PaperParser]]] = [
    ("usenix.org", UsenixParser),
]


def get_host(url: str) -> str:
    """
    Return the host name of an absolute URL.

    Raises:
        InvalidURLError: If the URL is unparsable or not absolute
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if not parsed.scheme:
        raise InvalidURLError(url, "relative URL without a base")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return host or ""


def get_parser(url: str, html_parser: str = "html.parser") -> PaperParser:
    """
    Pick the parser registered for the URL's host.

    Raises:
        InvalidURLError: If the URL cannot be parsed
        NoParserFoundError: If no registry entry matches the host
    """
    host = get_host(url)

    for host_pattern, parser_class in PARSER_REGISTRY:
        if host_pattern in host:
            logger.debug(f"Using {parser_class.__name__} for: {url}")
            return parser_class(html_parser=html_parser)

    logger.warning(f"No parser found for host: {host}")
    raise NoParserFoundError(url)
