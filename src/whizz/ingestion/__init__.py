"""Whizz Ingestion Pipeline Components.

This package contains the ingestion pipeline with clear separation of concerns:
- Conversion session state
- Validation
- Pipeline orchestration
"""

from whizz.ingestion.pipeline import analyze_xyz
from whizz.ingestion.pipeline import build_dataset
from whizz.ingestion.pipeline import run_xyz_ingestion
from whizz.ingestion.session import ConversionSession
from whizz.ingestion.session import ConversionSummary
from whizz.ingestion.validation import line_count_qc

__all__ = [
    # Session
    "ConversionSession",
    "ConversionSummary",
    # Validation
    "line_count_qc",
    # Pipeline
    "analyze_xyz",
    "build_dataset",
    "run_xyz_ingestion",
]
