"""CLI components for output formatting, result aggregation, and processing services.

This module provides the building blocks for the CLI interface, including formatters
for colored output, aggregators for collecting results, and services that run the
pipeline, the lint rules and the builders for a single file.
"""

from .file_report import FileReport
from .output_formatter import ColoredFormatter, OutputFormatter
from .processing_service import ProcessingService, StandardProcessingService
from .result_aggregator import ResultAggregator, StandardResultAggregator

__all__ = [
    "ColoredFormatter",
    "FileReport",
    "OutputFormatter",
    "ProcessingService",
    "ResultAggregator",
    "StandardProcessingService",
    "StandardResultAggregator",
]
