"""
HTTP Fetch Stage - Downloads web pages.
One GET per URL with the default requests client: no custom headers,
no retries, redirects followed as requests does by default.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests
from requests.exceptions import RequestException

from ..stage import PipelineStage
from ..pipeline_data import PipelineData
from ...errors import FetchError, HTTPStatusError


@dataclass
class FetchConfig:
    """Configuration for HTTP fetch stage."""
    timeout_seconds: float = 30.0
    verify_ssl: bool = True


@dataclass
class FetchResult:
    url: str
    status_code: int
    html: str
    final_url: str
    content_type: str = ""
    response_time: float = 0.0


class HTTPFetcher:
    """Performs the GET request and validates the status code."""

    def __init__(self, config: FetchConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch a page.

        Raises:
            HTTPStatusError: If the response status is not 2xx
            FetchError: On transport failure
        """
        self.logger.info(f"Fetching HTML from: {url}")
        start_time = time.time()

        try:
            response = self.session.get(
                url,
                timeout=self.config.timeout_seconds,
                verify=self.config.verify_ssl,
            )
        except RequestException as e:
            raise FetchError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            self.logger.error(f"Failed to fetch URL {url}: {response.status_code}")
            raise HTTPStatusError(url, response.status_code)

        try:
            html = response.text
        except RequestException as e:
            raise FetchError(url, str(e)) from e

        result = FetchResult(
            url=url,
            status_code=response.status_code,
            html=html,
            final_url=response.url or url,
            content_type=response.headers.get('Content-Type', ''),
            response_time=time.time() - start_time,
        )
        self.logger.info(f"Successfully fetched HTML from: {url}")
        return result

    def close(self):
        self.session.close()


class FetchStage(PipelineStage):
    """
    Stage 2: HTTP Fetch.
    Stores the page body and response metadata on the pipeline data.
    """

    def __init__(self, config: FetchConfig, fetcher: Optional[HTTPFetcher] = None):
        super().__init__("HTTPFetch")
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.fetcher = fetcher or HTTPFetcher(config)

        self.stats = {
            'successful': 0,
            'failed': 0,
            'total_bytes': 0,
            'total_response_time': 0.0,
            'http_errors': {},
        }

    def process(self, data: PipelineData) -> PipelineData:
        try:
            result = self.fetcher.fetch(data.url)
        except HTTPStatusError as e:
            self.stats['failed'] += 1
            self.stats['http_errors'][e.status_code] = \
                self.stats['http_errors'].get(e.status_code, 0) + 1
            data.status_code = e.status_code
            raise
        except FetchError:
            self.stats['failed'] += 1
            raise

        self.stats['successful'] += 1
        self.stats['total_bytes'] += len(result.html)
        self.stats['total_response_time'] += result.response_time

        data.raw_html = result.html
        data.status_code = result.status_code
        data.final_url = result.final_url
        data.content_type = result.content_type

        self.logger.debug(f"Fetched: {data.url} ({len(result.html)} chars, "
                          f"{result.response_time:.2f}s)")
        return data

    def get_stats(self) -> dict:
        base_stats = super().get_stats()
        fetch_stats: Dict = dict(self.stats)
        fetch_stats['http_errors'] = dict(self.stats['http_errors'])
        base_stats['fetch_stats'] = fetch_stats
        return base_stats

    def close(self):
        """Release the HTTP session."""
        self.fetcher.close()
