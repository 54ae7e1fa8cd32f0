"""
Text-generation client.

A single operation, ``generate(prompt) -> text``, backed by the GenAI SDK.
The credential and model are injected at construction so the client can be
replaced by a fake in tests; the application builds one instance from
``Settings`` at startup.
"""
import asyncio
import logging
import time
from typing import Optional, Protocol

from google import genai

from app.core.config import settings
from app.core.exceptions import ConfigurationError, GenerationError

logger = logging.getLogger(__name__)


class Generator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class TextGenerator:
    """
    Stateless wrapper around the hosted Gemini model.

    No retry, timeout or rate limiting: callers decide how to recover from a
    ``GenerationError``. Safe to call concurrently for independent prompts.
    """

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured.")
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        client = self._get_client()

        logger.info(f"Gemini call started ({self.model}, {len(prompt)} chars)")
        start_time = time.perf_counter()
        try:
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise GenerationError(f"Text generation failed: {e}") from e

        elapsed = time.perf_counter() - start_time
        text = response.text
        if text is None:
            raise GenerationError("Text generation returned no text.")

        logger.info(f"Gemini call completed in {elapsed:.2f}s ({len(text)} chars)")
        logger.debug(f"Response preview: {text[:200]}...")
        return text


def build_generator() -> TextGenerator:
    """Build the application's generator from settings."""
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set; generation calls will fail and fall back.")
    return TextGenerator(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
