"""
Pipeline Stages Module

Pipeline Flow:
--------------
1. ParserSelectionStage  - Picks the site parser from the URL's host
2. FetchStage            - Downloads the page (one HTTP GET)
3. ParseStage            - Extracts paper records with the selected parser
4. StorageStage          - Inserts records inside the batch transaction

Usage:
------
from paper_crawler.pipeline.stages import FetchStage, FetchConfig

stage = FetchStage(FetchConfig(timeout_seconds=10))
data = stage.run(PipelineData(url='https://www.usenix.org/...'))
"""

# Stage 1: Parser selection
from .parser_selection_stage import ParserSelectionStage

# Stage 2: HTTP Fetch
from .fetch_stage import FetchStage, FetchConfig, HTTPFetcher

# Stage 3: Paper extraction
from .parse_stage import ParseStage, ParseConfig

# Stage 4: Storage
from .storage_stage import StorageStage, StorageConfig, SQLiteStorage


__all__ = [
    # ========================================================================
    # STAGES
    # ========================================================================
    'ParserSelectionStage',
    'FetchStage',
    'ParseStage',
    'StorageStage',

    # ========================================================================
    # CONFIGURATIONS
    # ========================================================================
    'FetchConfig',
    'ParseConfig',
    'StorageConfig',

    # ========================================================================
    # BACKENDS
    # ========================================================================
    'HTTPFetcher',
    'SQLiteStorage',
]
