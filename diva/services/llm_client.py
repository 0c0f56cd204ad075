"""
Text generation via an OpenAI-compatible ``/chat/completions`` endpoint.

One prompt in, one completion out.  There is no retry: a failed call
surfaces as ``UpstreamProviderError`` and the route turns it into a 500
with the provider's message attached.

Routes obtain the generator through the ``get_text_generator`` dependency
so tests can swap in a fake with ``app.dependency_overrides``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from diva.config import settings
from diva.exceptions import UpstreamProviderError
from diva.utils.helpers import truncate_text

logger = logging.getLogger(__name__)


class OpenAITextGenerator:
    """Thin async client for chat-completion text generation."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.timeout = httpx.Timeout(float(timeout or settings.LLM_TIMEOUT), connect=10.0)
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def generate(self, prompt: str) -> str:
        """
        Send *prompt* and return the generated text.

        Raises:
            UpstreamProviderError: timeout, connection failure, non-200
                response, or a body without ``choices[0].message.content``.
        """
        url = f"{self.base_url}/chat/completions"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(url, json=self._payload(prompt), headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.error("generate: request timed out after %.0f s", self.timeout.read or 0)
            raise UpstreamProviderError("Text generation timed out", [str(exc) or "timeout"]) from exc
        except httpx.HTTPError as exc:
            logger.error("generate: connection error — %s", exc)
            raise UpstreamProviderError("Text generation provider unreachable", [str(exc)]) from exc

        if resp.status_code != 200:
            logger.error(
                "generate: provider returned HTTP %d: %s",
                resp.status_code,
                truncate_text(resp.text, 300),
            )
            raise UpstreamProviderError(
                f"Text generation provider returned HTTP {resp.status_code}",
                [truncate_text(resp.text, 300)],
            )

        try:
            text = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("generate: malformed provider response — %s", truncate_text(resp.text, 300))
            raise UpstreamProviderError("Malformed response from text generation provider", [str(exc)]) from exc

        if not isinstance(text, str) or not text.strip():
            raise UpstreamProviderError("Text generation provider returned no content")

        logger.info("generate: %d characters from model %s", len(text), self.model)
        return text


def get_text_generator() -> OpenAITextGenerator:
    """FastAPI dependency returning a generator built from settings."""
    return OpenAITextGenerator()
