"""
LLM provider clients behind one interface: `complete(prompt, model) -> text`.

GoogleAI   : google-generativeai SDK (blocking call pushed to a thread)
Groq       : OpenAI-compatible chat completions over httpx
OpenRouter : OpenAI-compatible chat completions over httpx

Providers never retry and never decide about fallback; ProviderChain does that.
A provider without an API key fails immediately, before any network I/O.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional

import google.generativeai as genai
import httpx

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised by a provider when a single completion attempt fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        missing_key: bool = False,
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code
        self.missing_key = missing_key


class LLMProvider:
    """Base class; subclasses implement `_complete`."""

    name: str = ""

    def __init__(self, api_key: Optional[str], default_model: str) -> None:
        self.api_key = api_key
        self.default_model = default_model

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, prompt: str, model: Optional[str] = None) -> str:
        """Return the completion text for `prompt`. Raises ProviderError on failure."""
        if not self.configured:
            raise ProviderError(self.name, f"Missing {self.name} key", missing_key=True)
        text = await self._complete(prompt, model or self.default_model)
        if not text or not text.strip():
            raise ProviderError(self.name, "Empty response")
        return text.strip()

    async def _complete(self, prompt: str, model: str) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} model={self.default_model!r} configured={self.configured}>"


class GoogleAIProvider(LLMProvider):
    """Gemini models through the google-generativeai SDK."""

    name = "GoogleAI"

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        temperature: float = 0.3,
        max_output_tokens: int = 1024,
    ) -> None:
        super().__init__(api_key, default_model)
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    async def _complete(self, prompt: str, model: str) -> str:
        genai.configure(api_key=self.api_key)
        generative_model = genai.GenerativeModel(model)
        response = await asyncio.to_thread(
            generative_model.generate_content,
            prompt,
            generation_config=genai.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_output_tokens,
            ),
        )
        return _gemini_text(response)


def _gemini_text(response: Any) -> str:
    """Join the text parts of the first candidate; blocked responses yield ''."""
    try:
        return response.text or ""
    except ValueError:
        # .text raises when the candidate has no parts (safety block, max tokens)
        pass
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ""
    parts = getattr(getattr(candidates[0], "content", None), "parts", None) or []
    return " ".join(getattr(p, "text", "") for p in parts).strip()


class OpenAICompatibleProvider(LLMProvider):
    """Chat-completions provider speaking the OpenAI wire format."""

    url: str = ""

    def __init__(
        self,
        api_key: Optional[str],
        default_model: str,
        temperature: float = 0.2,
        timeout_seconds: float = 8.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(api_key, default_model)
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, headers=self._headers(), json=payload)
        timeout = httpx.Timeout(self.timeout_seconds, connect=min(self.timeout_seconds, 5.0))
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(self.url, headers=self._headers(), json=payload)

    async def _complete(self, prompt: str, model: str) -> str:
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }
        response = await self._post(payload)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = re.sub(r"\s+", " ", exc.response.text or "")[:200]
            status = exc.response.status_code
            raise ProviderError(
                self.name,
                f"HTTP {status}: {body}" if body else f"HTTP {status}",
                status_code=status,
            ) from exc

        data = response.json()
        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""


class GroqProvider(OpenAICompatibleProvider):
    name = "Groq"
    url = "https://api.groq.com/openai/v1/chat/completions"


class OpenRouterProvider(OpenAICompatibleProvider):
    name = "OpenRouter"
    url = "https://openrouter.ai/api/v1/chat/completions"

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["X-Title"] = "FoodieTrust"
        return headers
