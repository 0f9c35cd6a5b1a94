"""
Pipeline Framework Module

This module contains the pipeline infrastructure for the paper crawler.

Components:
-----------
- PipelineStage: Abstract base class for all stages
- PipelineData: Data container that flows through the pipeline

Usage:
------
from paper_crawler.pipeline import PipelineStage, PipelineData

class MyCustomStage(PipelineStage):
    def process(self, data: PipelineData) -> PipelineData:
        # Your processing logic; raise a CrawlError to fail the URL
        return data
"""

from .stage import PipelineStage
from .pipeline_data import PipelineData

__all__ = [
    'PipelineStage',
    'PipelineData',
]
