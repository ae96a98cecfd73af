"""
Provider router.

Takes normalized prompts and turns them into exactly one upstream HTTP call
through the adapter registered for the selected provider. Vendor names are
only looked at during adapter selection.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx

from summarize_docs_ai.config import RouterConfig, Settings
from summarize_docs_ai.errors import (
    RequestCancelled,
    UpstreamError,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from summarize_docs_ai.http_client import HttpClientFactory
from summarize_docs_ai.llm.base import ProviderAdapter, UpstreamRequest
from summarize_docs_ai.llm.factory import create_adapter
from summarize_docs_ai.models import (
    Mode,
    ProviderCredentials,
    ProviderResult,
    SummarizationRequest,
)
from summarize_docs_ai.prompts import system_prompt

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compute_token_budget(request: SummarizationRequest, config: RouterConfig | None = None) -> int:
    """
    Output budget passed to the adapter.

    Summary modes use ``floor(len(text) * length_factor * token_budget_ratio)``
    clamped to the configured bounds. Grammar checks use a fixed budget.
    """
    config = config or RouterConfig()
    if request.resolved_mode is Mode.GRAMMAR:
        return config.grammar_max_tokens

    budget = math.floor(len(request.text) * request.length_factor * config.token_budget_ratio)
    budget = max(config.min_output_tokens, budget)
    if config.max_output_tokens is not None:
        budget = min(budget, config.max_output_tokens)
    return budget


class ProviderRouter:
    """
    Routes normalized prompts to upstream LLM vendors.

    One instance can serve many concurrent calls: it keeps no per-call state.
    The httpx client is either borrowed from the caller or created lazily and
    closed by ``aclose()``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the router.

        Args:
            settings: Application settings (provider overrides, timeouts, budgets).
            client: Shared httpx client. If None, the router creates and owns one.
        """
        self._settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = HttpClientFactory.client(self._settings.router)
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ProviderRouter:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def adapter_for(self, credentials: ProviderCredentials) -> ProviderAdapter:
        """Create the adapter for the credentials' provider, applying config overrides."""
        return create_adapter(
            credentials.provider,
            credentials.api_key,
            self._settings.providers,
        )

    async def execute(
        self,
        credentials: ProviderCredentials,
        prompt: str,
        request: SummarizationRequest,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ProviderResult:
        """
        Send one normalized prompt to the selected provider.

        Args:
            credentials: Provider id and API key.
            prompt: Normalized prompt built from ``request``.
            request: The originating request (mode and length drive the budget).
            timeout: Per-call deadline in seconds. Defaults to router.request_timeout.
            cancel: Optional event; setting it abandons the in-flight call.

        Returns:
            ProviderResult with the extracted text.

        Raises:
            MissingCredentials: If the API key is blank.
            UnsupportedProvider: If no adapter is registered for the provider.
            UpstreamError: If the provider answers with a non-success status.
            MalformedUpstreamResponse: If the success body lacks the result field.
            UpstreamTimeout: If the deadline passes first.
            UpstreamUnavailable: On transport failures.
            RequestCancelled: If ``cancel`` is set before the call completes.
        """
        credentials.validate()
        request.validate()
        adapter = self.adapter_for(credentials)

        mode = request.resolved_mode
        max_tokens = compute_token_budget(request, self._settings.router)
        temperature = None if mode is Mode.GRAMMAR else adapter.temperature
        upstream = adapter.build_request(
            prompt,
            system=system_prompt(mode),
            max_tokens=max_tokens,
            temperature=temperature,
        )
        deadline = timeout if timeout is not None else self._settings.router.request_timeout

        logger.debug(
            "Sending %s request to %s (model=%s, max_tokens=%d)",
            mode.value,
            adapter.name,
            adapter.model,
            max_tokens,
        )

        start_time = time.perf_counter()
        response = await self._send(adapter, upstream, deadline, cancel)
        latency_ms = (time.perf_counter() - start_time) * 1000

        if not response.is_success:
            provider_message = adapter.extract_error(_decode_body(response))
            logger.warning(
                "%s returned HTTP %d: %s", adapter.name, response.status_code, provider_message
            )
            raise UpstreamError(adapter.name, response.status_code, provider_message)

        try:
            body = response.json()
        except ValueError:
            raise adapter.malformed("response body is not valid JSON") from None

        text = adapter.extract_result(body)

        return ProviderResult(
            text=text,
            provider=adapter.name,
            model=adapter.model,
            max_tokens=max_tokens,
            latency_ms=latency_ms,
            metadata={
                "mode": mode.value,
                "status": response.status_code,
            },
        )

    async def _send(
        self,
        adapter: ProviderAdapter,
        upstream: UpstreamRequest,
        deadline: float,
        cancel: asyncio.Event | None,
    ) -> httpx.Response:
        if cancel is not None and cancel.is_set():
            raise RequestCancelled(adapter.name)

        client = self._get_client()
        connect = min(self._settings.router.connect_timeout, deadline)
        call = asyncio.wait_for(
            client.request(
                upstream.method,
                upstream.url,
                headers=upstream.headers,
                json=upstream.json,
                timeout=httpx.Timeout(deadline, connect=connect),
                follow_redirects=True,
            ),
            deadline,
        )

        try:
            if cancel is None:
                return await call
            return await _cancellable(call, cancel, adapter.name)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise UpstreamTimeout(adapter.name, deadline) from None
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(adapter.name, str(e) or type(e).__name__) from e


async def _cancellable(call: Awaitable[T], cancel: asyncio.Event, provider: str) -> T:
    """Await ``call`` unless ``cancel`` is set first."""
    task = asyncio.ensure_future(call)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        if task in done:
            return task.result()
        raise RequestCancelled(provider)
    finally:
        pending = [f for f in (task, waiter) if not f.done()]
        for fut in pending:
            fut.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
