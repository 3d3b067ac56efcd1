"""Service layer for business logic."""

from .analysis_service import AnalysisService, run_analysis
from .document_extractor import DocumentExtractor, DocxTextReader, PythonDocxReader, extract_document
from .llm_providers import (
    ClassificationProvider,
    ProxyProvider,
    AnthropicProvider,
    GeminiProvider,
    create_provider,
)
from .report import format_result_markdown, report_filename

__all__ = [
    "AnalysisService",
    "run_analysis",
    "DocumentExtractor",
    "DocxTextReader",
    "PythonDocxReader",
    "extract_document",
    "ClassificationProvider",
    "ProxyProvider",
    "AnthropicProvider",
    "GeminiProvider",
    "create_provider",
    "format_result_markdown",
    "report_filename",
]
