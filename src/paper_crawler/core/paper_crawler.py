"""
Paper Crawler - Orchestrator that drives a crawl batch through all stages.
This is the high-level interface consumed by the calling layer.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..errors import CrawlError, StorageError
from ..models import CrawlReport, CrawlResult
from ..pipeline.pipeline_data import PipelineData
from ..pipeline.stages.parser_selection_stage import ParserSelectionStage
from ..pipeline.stages.fetch_stage import FetchStage, FetchConfig
from ..pipeline.stages.parse_stage import ParseStage, ParseConfig
from ..pipeline.stages.storage_stage import StorageStage, StorageConfig, apply_database_env


@dataclass
class CrawlerConfig:
    """Master configuration for the crawl pipeline."""
    fetch: FetchConfig = field(default_factory=FetchConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def from_environment(cls) -> "CrawlerConfig":
        """Defaults, with DATABASE_PATH applied to the storage config."""
        config = cls()
        apply_database_env(config.storage)
        return config


class PaperCrawler:
    """
    Main crawler orchestrator.

    Processes a batch of URLs strictly in order, one at a time:

        parser selection -> fetch -> extraction -> storage

    Per-URL failures in the first three stages are logged and skipped.
    A storage failure rolls back the batch transaction and aborts the
    remaining URLs.
    """

    def __init__(self, config: Optional[CrawlerConfig] = None,
                 fetch_stage: Optional[FetchStage] = None,
                 storage_stage: Optional[StorageStage] = None):
        """
        Initialize the crawler.

        Args:
            config: Complete crawler configuration (defaults if omitted)
            fetch_stage: Pre-built fetch stage, e.g. with a custom session
            storage_stage: Pre-built storage stage, e.g. with a shared store
        """
        self.config = config or CrawlerConfig.from_environment()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.selection_stage = ParserSelectionStage(html_parser=self.config.parse.parser)
        self.fetch_stage = fetch_stage or FetchStage(self.config.fetch)
        self.parse_stage = ParseStage(self.config.parse)
        self.storage_stage = storage_stage or StorageStage(self.config.storage)

        self.stages = [
            self.selection_stage,
            self.fetch_stage,
            self.parse_stage,
            self.storage_stage,
        ]

        self.start_time: Optional[float] = None
        self.last_result: Optional[CrawlResult] = None

        self.logger.info("Paper crawler initialized")

    def crawl(self, urls: Sequence[str]) -> CrawlResult:
        """
        Run one batch.

        Returns:
            CrawlResult with found/inserted totals

        Raises:
            StorageError: On insert, transaction-open or commit failure.
                Nothing from the batch is committed in that case.
        """
        self.start_time = time.time()

        self.logger.info(f"Starting crawl with {len(urls)} URL(s)")
        self.storage_stage.begin_batch()

        try:
            total_found, total_inserted = self._process_batch(urls)
        except Exception:
            self.storage_stage.rollback_batch()
            raise

        self.storage_stage.commit_batch()

        self.last_result = CrawlResult(total_found=total_found, total_inserted=total_inserted)
        return self.last_result

    def _process_batch(self, urls: Sequence[str]) -> Tuple[int, int]:
        total_found = 0
        total_inserted = 0

        for url in urls:
            data = PipelineData(url=url)

            try:
                self.selection_stage.run(data)
            except CrawlError as e:
                self.logger.error(f"Skipping URL: {e}")
                continue

            try:
                self.fetch_stage.run(data)
            except CrawlError as e:
                self.logger.error(f"Error fetching URL {url}: {e}")
                continue

            try:
                self.parse_stage.run(data)
            except CrawlError as e:
                self.logger.error(f"Error parsing/extracting from {url}: {e}")
                continue

            total_found += len(data.papers)
            if not data.papers:
                continue

            try:
                self.storage_stage.run(data)
            except StorageError as e:
                self.logger.error(f"Database insertion error for {url}: {e}. Rolling back.")
                raise

            total_inserted += data.inserted_count
            self.logger.debug(
                f"Finished {url} in {data.get_total_processing_time():.2f}s"
            )

        return total_found, total_inserted

    def run_crawl(self, urls: Sequence[str]) -> CrawlReport:
        """
        Run one batch and render the outcome as a one-line message.

        This is the boundary where structured errors become text.
        """
        try:
            result = self.crawl(urls)
        except StorageError as e:
            self.logger.error(f"Crawl failed: {e}")
            return CrawlReport(ok=False, message=str(e))
        except Exception as e:
            self.logger.exception(f"Crawl failed unexpectedly: {e}")
            return CrawlReport(ok=False, message=f"Unexpected error: {e}")

        self.logger.info(result.summary)
        return CrawlReport(ok=True, message=result.summary)

    def close(self):
        """Release network resources."""
        self.fetch_stage.close()

    def get_status(self) -> dict:
        """
        Get crawler status and per-stage statistics.

        Returns:
            dict with status information
        """
        status = {
            'runtime_seconds': time.time() - self.start_time if self.start_time else 0,
            'stages': [stage.get_stats() for stage in self.stages],
            'overall': {},
        }

        result = self.last_result or CrawlResult()
        status['overall'] = {
            'total_errors': sum(stage.error_count for stage in self.stages),
            'papers_found': result.total_found,
            'papers_inserted': result.total_inserted,
        }
        return status

    def print_status(self):
        """Print a formatted status summary."""
        status = self.get_status()

        print("\n" + "="*60)
        print("CRAWLER STATUS")
        print("="*60)
        print(f"Runtime: {status['runtime_seconds']:.2f} seconds")
        print(f"Papers Found: {status['overall']['papers_found']}")
        print(f"Papers Inserted: {status['overall']['papers_inserted']}")
        print(f"Total Errors: {status['overall']['total_errors']}")

        print("\nStage Status:")
        print("-"*60)
        for stage_stat in status['stages']:
            print(f"  {stage_stat['name']:20} | "
                  f"Processed: {stage_stat['processed']:6} | "
                  f"Errors: {stage_stat['errors']:4}")

        print("="*60 + "\n")


def run_crawl(urls: Sequence[str], config: Optional[CrawlerConfig] = None) -> CrawlReport:
    """Run one crawl batch with a fresh crawler and return its report."""
    try:
        crawler = PaperCrawler(config)
    except StorageError as e:
        logging.getLogger(__name__).error(f"Crawl failed: {e}")
        return CrawlReport(ok=False, message=str(e))

    try:
        return crawler.run_crawl(list(urls))
    finally:
        crawler.close()


def start_background_crawl(urls: List[str],
                           config: Optional[CrawlerConfig] = None) -> threading.Thread:
    """
    Run a crawl batch on a daemon thread and return immediately.

    The outcome is only logged; callers that need it can join() the thread
    and read the log.
    """
    logger = logging.getLogger(__name__)
    urls_to_crawl = list(urls)

    def _worker():
        logger.info("Background crawl task started...")
        report = run_crawl(urls_to_crawl, config)
        if report.ok:
            logger.info(f"Background crawl finished: {report.message}")
        else:
            logger.error(f"Background crawl failed: {report.message}")

    thread = threading.Thread(target=_worker, name="background-crawl", daemon=True)
    thread.start()
    return thread
