"""
Summarization service.

Glues the request normalizer to the provider router. Both the HTTP layer and
the CLI call into this class; neither talks to the router directly.
"""

from __future__ import annotations

import asyncio
import logging

from summarize_docs_ai.models import (
    Mode,
    ProviderCredentials,
    ProviderResult,
    SummarizationRequest,
)
from summarize_docs_ai.prompts import normalize
from summarize_docs_ai.router import ProviderRouter

logger = logging.getLogger(__name__)


class SummarizerService:
    """Runs summarization and grammar-check requests through a ProviderRouter."""

    def __init__(self, router: ProviderRouter):
        self._router = router

    async def summarize(
        self,
        request: SummarizationRequest,
        credentials: ProviderCredentials,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ProviderResult:
        """
        Summarize (or grammar-check, for mode=grammar) one request.

        Args:
            request: User-facing request.
            credentials: Provider id and API key.
            timeout: Optional per-call deadline override.
            cancel: Optional cancellation event.

        Returns:
            ProviderResult with the provider's text.
        """
        credentials.validate()
        request.validate()
        prompt = normalize(request)

        result = await self._router.execute(
            credentials, prompt, request, timeout=timeout, cancel=cancel
        )
        logger.info(
            "%s via %s/%s: %d chars in, %d chars out, budget %d, %.0f ms",
            request.resolved_mode.value,
            result.provider,
            result.model,
            len(request.text),
            len(result.text),
            result.max_tokens,
            result.latency_ms,
        )
        return result

    async def check_grammar(
        self,
        text: str,
        credentials: ProviderCredentials,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ProviderResult:
        """Grammar, spelling and style check with a fixed output budget."""
        request = SummarizationRequest(text=text, mode=Mode.GRAMMAR)
        return await self.summarize(request, credentials, timeout=timeout, cancel=cancel)
