"""Factory to create LLM clients based on a mode string or settings."""

from typing import Optional

from locpages.llm.client import LLMClient
from locpages.llm.gemini_client import GeminiClient
from locpages.settings import settings


def get_llm_client(mode: Optional[str] = None) -> LLMClient:
    """Return an LLMClient instance for the requested mode.

    Priority: explicit `mode` argument -> `LLM_MODE` setting -> default 'gemini'
    """
    selected = (mode or settings.llm_mode or "gemini").lower()

    if selected in ("gemini", "google", "googleai"):
        return GeminiClient()

    raise ValueError(f"Unsupported LLM mode: {selected}")
