"""Gemini client implementation using the google-genai SDK."""

from typing import Any

from google import genai
from google.genai import types

from locpages.llm.client import LLMClient
from locpages.settings import settings


class GeminiClient(LLMClient):
    """Gemini client."""

    def __init__(self, api_key: str | None = None, model_name: str | None = None) -> None:
        """Initialize Gemini client from settings unless overridden."""
        self.client = genai.Client(
            api_key=api_key or settings.gemini_api_key,
            http_options=types.HttpOptions(api_version="v1beta"),
        )
        self.model_name = model_name or settings.gemini_model

    async def generate(self, prompt: str, context: dict | None = None) -> str:
        """Generate a response using Gemini.

        Args:
            prompt: The prompt to send to the LLM
            context: Optional context dictionary (temperature, max_tokens, etc.)

        Returns:
            The generated response text

        Raises:
            RuntimeError: If generation fails
        """
        try:
            generation_config: dict[str, Any] = {
                "temperature": settings.content_writer_temperature,
                "max_output_tokens": settings.content_writer_max_tokens,
            }

            if context:
                if "temperature" in context:
                    generation_config["temperature"] = context["temperature"]
                if "max_tokens" in context:
                    generation_config["max_output_tokens"] = context["max_tokens"]
                if context.get("json"):
                    generation_config["response_mime_type"] = "application/json"

            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(**generation_config),
            )

            return response.text or ""
        except Exception as e:
            raise RuntimeError(f"Gemini generation failed: {str(e)}") from e
