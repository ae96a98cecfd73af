from __future__ import annotations

import httpx

from summarize_docs_ai.config import RouterConfig


def default_timeout(config: RouterConfig | None = None) -> httpx.Timeout:
    config = config or RouterConfig()
    return httpx.Timeout(
        connect=config.connect_timeout,
        read=config.request_timeout,
        write=20.0,
        pool=10.0,
    )


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=100, max_keepalive_connections=20)


class HttpClientFactory:
    """Creates shared httpx clients with sane defaults.

    Keep one client per service process; do not create per-request.
    """

    @staticmethod
    def client(
        config: RouterConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=default_timeout(config),
            limits=default_limits(),
            follow_redirects=True,
            transport=transport,
        )
