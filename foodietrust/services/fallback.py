"""
Provider fallback: try each LLM provider in a fixed order, return the first
non-empty answer.

Every attempt gets its own timeout. Any failure (HTTP error, timeout,
exception, empty body) moves on to the next provider; there is no
status-specific branching, no backoff, and a failed provider is not retried
within the same call. When the list is exhausted one error carrying every
provider's failure is raised.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from foodietrust.config import Settings
from foodietrust.services.providers import (
    GoogleAIProvider,
    GroqProvider,
    LLMProvider,
    OpenRouterProvider,
    ProviderError,
)

logger = logging.getLogger(__name__)


@dataclass
class AIResult:
    provider: str
    result: str
    cached: bool = False

    def to_dict(self) -> dict:
        return {"provider": self.provider, "result": self.result, "cached": self.cached}


@dataclass(frozen=True)
class ProviderFailure:
    provider: str
    message: str
    missing_key: bool = False


class AllProvidersFailedError(Exception):
    """Raised when every provider in the chain failed."""

    reason = "all-providers-failed"

    def __init__(self, failures: Sequence[ProviderFailure]) -> None:
        self.failures = list(failures)
        summary = "; ".join(f"{f.provider}: {f.message}" for f in self.failures)
        super().__init__(f"All providers failed. {summary}".strip())


class NoProviderConfiguredError(AllProvidersFailedError):
    """Every provider failed only because it had no API key."""

    reason = "no-provider-configured"


class ProviderChain:
    """Ordered list of providers tried one after another."""

    def __init__(self, providers: Sequence[LLMProvider], timeout_seconds: float = 8.0) -> None:
        self.providers = list(providers)
        self.timeout_seconds = timeout_seconds

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self.providers]

    async def complete(
        self, prompt: str, models: Optional[dict[str, Optional[str]]] = None
    ) -> AIResult:
        """
        Return the first successful completion.

        `models` maps provider name -> model id and overrides that provider's
        default model for this call only.
        """
        models = models or {}
        failures: list[ProviderFailure] = []

        for provider in self.providers:
            model = models.get(provider.name) or provider.default_model
            try:
                text = await asyncio.wait_for(
                    provider.complete(prompt, model), timeout=self.timeout_seconds
                )
            except asyncio.TimeoutError:
                message = f"timed out after {self.timeout_seconds:g}s"
                logger.warning("Provider %s (%s) %s", provider.name, model, message)
                failures.append(ProviderFailure(provider.name, message))
                continue
            except ProviderError as exc:
                logger.warning("Provider %s (%s) failed: %s", provider.name, model, exc)
                failures.append(
                    ProviderFailure(provider.name, str(exc), missing_key=exc.missing_key)
                )
                continue
            except Exception as exc:
                logger.warning(
                    "Provider %s (%s) raised %s: %s",
                    provider.name, model, type(exc).__name__, exc,
                )
                failures.append(ProviderFailure(provider.name, f"{type(exc).__name__}: {exc}"))
                continue

            if failures:
                logger.info(
                    "Provider %s answered after %d failure(s)", provider.name, len(failures)
                )
            return AIResult(provider=provider.name, result=text)

        if all(f.missing_key for f in failures):
            error: AllProvidersFailedError = NoProviderConfiguredError(failures)
        else:
            error = AllProvidersFailedError(failures)
        logger.error("%s", error)
        raise error


def build_provider_chain(settings: Settings) -> ProviderChain:
    """Default chain: GoogleAI -> Groq -> OpenRouter."""
    timeout = settings.provider_timeout_seconds
    return ProviderChain(
        [
            GoogleAIProvider(settings.googleai_key, settings.googleai_model),
            GroqProvider(settings.groq_key, settings.groq_model, timeout_seconds=timeout),
            OpenRouterProvider(
                settings.openrouter_key, settings.openrouter_model, timeout_seconds=timeout
            ),
        ],
        timeout_seconds=timeout,
    )
