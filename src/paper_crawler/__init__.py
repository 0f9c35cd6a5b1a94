"""
Paper Crawler - Ingests conference papers from web pages into SQLite.

Features:
- Site-specific parsers selected by host name
- Sequential pipeline: parser selection, fetch, extraction, storage
- One transaction per crawl batch, duplicates ignored
- Per-URL failures logged and skipped; storage failures roll back the batch
- Configurable via YAML
"""

__version__ = "1.0.0"

from .core.paper_crawler import PaperCrawler, CrawlerConfig, run_crawl, start_background_crawl
from .config.crawler_config import ConfigLoader, validate_config
from .models import Paper, CrawlReport, CrawlResult

__all__ = [
    'PaperCrawler',
    'CrawlerConfig',
    'run_crawl',
    'start_background_crawl',
    'ConfigLoader',
    'validate_config',
    'Paper',
    'CrawlReport',
    'CrawlResult',
]
