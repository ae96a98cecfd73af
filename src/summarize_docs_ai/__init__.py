"""
summarize-docs-ai: text summarization and grammar checking over LLM providers.

This package provides:
- A pure request normalizer (paragraph, bullet, custom and grammar modes)
- A provider router with adapters for OpenAI, Mistral and Anthropic
- Document text extraction for .txt, .pdf and .docx uploads
- A FastAPI HTTP boundary and a typer CLI
"""

__version__ = "0.1.0"

from summarize_docs_ai.config import Settings, load_config
from summarize_docs_ai.errors import SummarizerError
from summarize_docs_ai.extract import ExtractionResult, extract_text
from summarize_docs_ai.models import (
    Mode,
    ProviderCredentials,
    ProviderResult,
    ProviderType,
    SummarizationRequest,
    TextStats,
)
from summarize_docs_ai.prompts import normalize
from summarize_docs_ai.router import ProviderRouter, compute_token_budget
from summarize_docs_ai.service import SummarizerService

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Errors
    "SummarizerError",
    # Models
    "Mode",
    "ProviderType",
    "SummarizationRequest",
    "ProviderCredentials",
    "ProviderResult",
    "TextStats",
    # Core
    "normalize",
    "ProviderRouter",
    "compute_token_budget",
    "SummarizerService",
    # Extraction
    "ExtractionResult",
    "extract_text",
]
