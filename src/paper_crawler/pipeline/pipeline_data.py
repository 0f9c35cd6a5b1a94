"""
Pipeline Data Model - Data container that flows through the pipeline
File: src/paper_crawler/pipeline/pipeline_data.py
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict

from ..models import Paper
from ..parsers.base import PaperParser


@dataclass
class PipelineData:
    """
    Data container for one URL of a crawl batch.
    Each stage adds to it as it processes.
    """
    # Core fields - required
    url: str

    # Populated by stages
    parser: Optional[PaperParser] = None
    raw_html: Optional[str] = None
    papers: List[Paper] = field(default_factory=list)
    inserted_count: int = 0

    # HTTP response metadata
    status_code: Optional[int] = None
    content_type: Optional[str] = None
    final_url: Optional[str] = None  # After redirects

    # Timing and error tracking
    stage_timings: Dict[str, float] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def add_error(self, error: str, stage: str = "unknown") -> None:
        """Add an error message with stage information"""
        self.errors.append(f"[{stage}] {error}")

    def add_timing(self, stage: str, duration: float) -> None:
        """Record processing time for a stage"""
        self.stage_timings[stage] = duration

    def get_total_processing_time(self) -> float:
        """Calculate total processing time across all stages"""
        return sum(self.stage_timings.values())

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def __repr__(self) -> str:
        return (f"PipelineData(url='{self.url}', status={self.status_code}, "
                f"papers={len(self.papers)})")
