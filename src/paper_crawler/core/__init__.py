"""
Core Module - High-level crawl orchestration.

This module contains the crawler orchestrator that drives every URL of a
batch through the pipeline stages and reports the outcome.

Components:
-----------
- PaperCrawler: Orchestrator that builds the stages and runs a batch
- CrawlerConfig: Complete configuration for all pipeline stages
- run_crawl: One-call entry point returning a CrawlReport
- start_background_crawl: Fire-and-forget variant on a daemon thread

Usage:
------
from paper_crawler.core import PaperCrawler
from paper_crawler.config import ConfigLoader

config = ConfigLoader.load_from_yaml('config/default.yaml')
crawler = PaperCrawler(config)

report = crawler.run_crawl([
    'https://www.usenix.org/conference/usenixsecurity24/technical-sessions',
])
print(report.message)

crawler.print_status()
crawler.close()
"""

from .paper_crawler import (
    PaperCrawler,
    CrawlerConfig,
    run_crawl,
    start_background_crawl,
)

__all__ = [
    'PaperCrawler',
    'CrawlerConfig',
    'run_crawl',
    'start_background_crawl',
]
