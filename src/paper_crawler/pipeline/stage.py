"""
Pipeline Stage - Abstract base class for all pipeline stages.

This module defines the PipelineStage abstract base class that all concrete
stages must inherit from. It provides common functionality for:
- Error bookkeeping on the data item
- Statistics tracking
- Per-item timing

Stages run one item at a time on the caller's thread. A stage signals failure
by raising a CrawlError subclass; the orchestrator decides whether the error
skips the URL or aborts the batch.
"""

import logging
import time
from abc import ABC, abstractmethod

from .pipeline_data import PipelineData


class PipelineStage(ABC):
    """
    Abstract base class for all pipeline stages.

    Lifecycle:
    ---------
    1. Create stage instance
    2. Call run() for each URL of the batch, in order
    3. Read get_stats() for monitoring
    """

    def __init__(self, name: str):
        """
        Initialize pipeline stage.

        Args:
            name: Stage name (for logging/monitoring)
        """
        self.name = name

        # Statistics
        self.processed_count = 0
        self.error_count = 0
        self.start_time = time.time()
        self.total_processing_time = 0.0

        # Logging
        self.logger = logging.getLogger(f"{self.__class__.__name__}:{self.name}")

    @abstractmethod
    def process(self, data: PipelineData) -> PipelineData:
        """
        Process a single data item.

        This method MUST be implemented by all concrete stages.

        Args:
            data: Pipeline data for one URL

        Returns:
            The same data item, enriched by this stage

        Raises:
            CrawlError: When the stage cannot complete for this item
        """
        pass

    def run(self, data: PipelineData) -> PipelineData:
        """
        Process an item with timing and error accounting.

        Exceptions from process() are recorded on the item and re-raised.
        """
        start_time = time.time()
        try:
            result = self.process(data)
        except Exception as e:
            self.error_count += 1
            data.add_error(str(e), self.name)
            raise
        finally:
            processing_time = time.time() - start_time
            self.total_processing_time += processing_time
            data.add_timing(self.name, processing_time)

        self.processed_count += 1
        self.logger.debug(f"Processed {data.url} in {processing_time:.3f}s")
        return result

    def get_stats(self) -> dict:
        """
        Get stage statistics.

        Returns:
            dict with statistics
        """
        runtime = time.time() - self.start_time
        attempts = self.processed_count + self.error_count

        stats = {
            'name': self.name,
            'processed': self.processed_count,
            'errors': self.error_count,
            'runtime_seconds': round(runtime, 2),
        }

        if attempts > 0:
            stats['avg_processing_time_seconds'] = round(
                self.total_processing_time / attempts, 3
            )
        else:
            stats['avg_processing_time_seconds'] = 0.0

        return stats

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name='{self.name}'>"
