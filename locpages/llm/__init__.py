"""LLM abstraction layer."""

from locpages.llm.client import LLMClient
from locpages.llm.content_writer import (
    INTENT_TYPES,
    ContentDraft,
    ContentRequest,
    ContentWriter,
    LLMContentWriter,
)
from locpages.llm.gemini_client import GeminiClient

__all__ = [
    "LLMClient",
    "GeminiClient",
    "INTENT_TYPES",
    "ContentDraft",
    "ContentRequest",
    "ContentWriter",
    "LLMContentWriter",
]
